from datetime import datetime
from typing import AsyncGenerator

import httpx
import pytest
from asgi_lifespan import LifespanManager
from fastapi import FastAPI

from news_api.config.config import JwtConfig, Settings
from news_api.main import create_app
from news_api.models.article import Article
from news_api.models.comment import Comment
from news_api.models.topic import Topic
from news_api.models.user import User

TOPICS = [
    ("mitch", "The man, the Mitch, the legend"),
    ("cats", "Not dogs"),
    ("paper", "what books are made of"),
]

# 비밀번호는 모두 `{username}1`
USERS = [
    ("butter_bridge", "jonny", "https://www.healthytherapies.com/wp-content/uploads/2016/06/Lime3.jpg"),
    ("icellusedkars", "sam", "https://avatars2.githubusercontent.com/u/24604688?s=460&v=4"),
    ("rogersop", "paul", "https://avatars2.githubusercontent.com/u/24394918?s=400&v=4"),
    ("lurker", "do_nothing", "https://www.golenbock.com/wp-content/uploads/2015/01/placeholder-user.png"),
]

# (title, topic, author, created_at, votes). article_id는 1부터 순서대로
ARTICLES = [
    ("Living in the shadow of a great man", "mitch", "butter_bridge", datetime(2020, 7, 9, 21, 11), 100),
    ("Sony Vaio; or, The Laptop", "mitch", "icellusedkars", datetime(2020, 10, 16, 6, 3), 0),
    ("Eight pug gifs that remind me of mitch", "mitch", "icellusedkars", datetime(2020, 11, 3, 9, 12), 0),
    ("Student SUES Mitch!", "mitch", "rogersop", datetime(2020, 5, 6, 1, 14), 0),
    ("UNCOVERED: catspiracy to bring down democracy", "cats", "rogersop", datetime(2020, 8, 3, 13, 14), 0),
    ("A", "mitch", "icellusedkars", datetime(2020, 10, 18, 1, 0), 0),
    ("Z", "mitch", "icellusedkars", datetime(2020, 1, 7, 14, 8), 0),
    ("Does Mitch predate civilisation?", "mitch", "icellusedkars", datetime(2020, 4, 17, 1, 8), 0),
    ("They're not exactly dogs, are they?", "mitch", "butter_bridge", datetime(2020, 6, 6, 9, 10), 0),
    ("Seven inspirational thought leaders from Manchester UK", "mitch", "rogersop", datetime(2020, 5, 14, 4, 15), 0),
    ("Am I a cat?", "mitch", "icellusedkars", datetime(2020, 1, 15, 22, 21), 0),
    ("Moustache", "mitch", "butter_bridge", datetime(2020, 10, 11, 11, 24), 0),
]
ARTICLE_BODIES = {1: "I find this existence challenging"}

# (article_id, author, votes, created_at, body). comment_id는 1부터 순서대로
COMMENTS = [
    (9, "butter_bridge", 16, datetime(2020, 4, 6, 13, 17), "Oh, I've got compassion running out of my nose, pal! I'm the Sultan of Sentiment!"),
    (1, "butter_bridge", 14, datetime(2020, 10, 31, 3, 3), "The beautiful thing about treasure is that it exists."),
    (1, "icellusedkars", 100, datetime(2020, 3, 1, 1, 13), "Replacing the quiet elegance of the dark suit and tie with muted earth tones."),
    (1, "icellusedkars", -100, datetime(2020, 2, 23, 12, 1), "I carry a log — yes. Is it funny to you? It is not to me."),
    (1, "icellusedkars", 0, datetime(2020, 11, 3, 21, 0), "I hate streaming noses"),
    (1, "icellusedkars", 0, datetime(2020, 4, 11, 21, 2), "I hate streaming eyes even more"),
    (1, "icellusedkars", 0, datetime(2020, 5, 15, 20, 19), "Lobster pot"),
    (1, "icellusedkars", 0, datetime(2020, 4, 14, 20, 19), "Delicious crackerbreads"),
    (1, "icellusedkars", 0, datetime(2020, 1, 1, 3, 8), "Superficially charming"),
    (3, "icellusedkars", 0, datetime(2020, 6, 20, 7, 24), "git push origin master"),
    (3, "icellusedkars", 0, datetime(2020, 9, 19, 23, 10), "Ambidextrous marsupial"),
    (1, "icellusedkars", 0, datetime(2020, 3, 2, 7, 10), "Massive intercranial brain haemorrhage"),
    (1, "icellusedkars", 0, datetime(2020, 6, 15, 10, 25), "Fruit pastilles"),
    (5, "icellusedkars", 16, datetime(2020, 6, 9, 5, 0), "What do you see? I have no idea where this will lead us."),
    (5, "butter_bridge", 1, datetime(2020, 11, 24, 0, 8), "I am 100% sure that we're not completely sure."),
    (6, "butter_bridge", 1, datetime(2020, 10, 11, 15, 23), "This is a bad article name"),
    (9, "icellusedkars", 20, datetime(2020, 3, 14, 17, 2), "The owls are not what they seem."),
    (1, "butter_bridge", 16, datetime(2020, 7, 21, 0, 20), "This morning, I showered for nine minutes."),
]

AUTH_USERNAME = "authUser"
AUTH_PASSWORD = "test"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite+aiosqlite://",
        jwt=JwtConfig(secret_key="test-secret-key", expire_minutes=5),
        bcrypt_rounds=4,
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


async def _seed(app: FastAPI) -> None:
    """테스트 데이터를 DB에 직접 생성합니다."""
    credentials = app.state.credentials

    async with app.state.database.session_factory() as session:
        session.add_all(Topic(slug=slug, description=desc) for slug, desc in TOPICS)
        session.add_all(
            User(
                username=username,
                name=name,
                avatar_url=avatar_url,
                password=credentials.hash_password(f"{username}1"),
            )
            for username, name, avatar_url in USERS
        )
        session.add(
            User(
                username=AUTH_USERNAME,
                name="testman",
                avatar_url="avatar",
                password=credentials.hash_password(AUTH_PASSWORD),
            )
        )
        await session.commit()

        session.add_all(
            Article(
                article_id=article_id,
                title=title,
                topic=topic,
                author=author,
                body=ARTICLE_BODIES.get(article_id, f"{title} body"),
                created_at=created_at,
                votes=votes,
            )
            for article_id, (title, topic, author, created_at, votes) in enumerate(ARTICLES, 1)
        )
        await session.commit()

        session.add_all(
            Comment(
                comment_id=comment_id,
                article_id=article_id,
                author=author,
                votes=votes,
                created_at=created_at,
                body=body,
            )
            for comment_id, (article_id, author, votes, created_at, body) in enumerate(COMMENTS, 1)
        )
        await session.commit()


@pytest.fixture
async def api_client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    in-memory SQLite와 연결된 테스트 클라이언트.
    테스트마다 새 앱(새 DB)을 만들고 시드 데이터를 넣습니다.
    """
    async with (
        LifespanManager(app),
        httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url="http://test",
        ) as client,
    ):
        await _seed(app)
        yield client


@pytest.fixture
def login(api_client: httpx.AsyncClient):
    """`await login(username)` → 해당 사용자의 인증 헤더"""

    async def _login(username: str, password: str | None = None) -> dict:
        response = await api_client.post(
            "/api/login",
            json={"username": username, "password": password or f"{username}1"},
        )
        assert response.status_code == 200
        token = response.json()["user"]["token"]
        return {"Authorization": f"Bearer {token}"}

    return _login


@pytest.fixture
async def auth_headers(login) -> dict:
    """어떤 글/댓글의 작성자도 아닌 authUser의 인증 헤더"""
    return await login(AUTH_USERNAME, AUTH_PASSWORD)
