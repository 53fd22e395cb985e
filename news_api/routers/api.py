from fastapi import APIRouter

router = APIRouter(tags=["API"])

_LISTING_QUERIES = ["sort_by", "order", "limit", "p"]

ENDPOINTS = {
    "GET /api": {
        "description": "serves a json representation of all the available endpoints of the api",
    },
    "GET /api/topics": {
        "description": "serves an array of all topics",
        "queries": [],
        "exampleResponse": {
            "topics": [{"slug": "football", "description": "Footie!"}],
        },
    },
    "POST /api/topics": {
        "description": "creates a new topic and serves the created topic",
        "exampleRequest": {"slug": "dogs", "description": "dogs are awesome"},
        "exampleResponse": {"slug": "dogs", "description": "dogs are awesome"},
    },
    "GET /api/articles": {
        "description": "serves a page of articles, each carrying comment_count and the total_count of articles matching the filters",
        "queries": ["topic", "search", *_LISTING_QUERIES],
        "exampleResponse": {
            "articles": [
                {
                    "article_id": 3,
                    "title": "Eight pug gifs that remind me of mitch",
                    "topic": "mitch",
                    "author": "icellusedkars",
                    "created_at": "2020-11-03T09:12:00.000Z",
                    "votes": 0,
                    "comment_count": 2,
                    "total_count": 12,
                }
            ]
        },
    },
    "POST /api/articles": {
        "description": "creates an article authored by the logged in user (bearer token required)",
        "exampleRequest": {
            "author": "butter_bridge",
            "title": "Posting is fun!",
            "body": "Posting is the new getting!",
            "topic": "cats",
        },
        "exampleResponse": {
            "article": {
                "article_id": 13,
                "author": "butter_bridge",
                "title": "Posting is fun!",
                "body": "Posting is the new getting!",
                "topic": "cats",
                "created_at": "2020-11-03T09:12:00.000Z",
                "votes": 0,
                "comment_count": 0,
            }
        },
    },
    "GET /api/articles/:article_id": {
        "description": "serves a single article with its comment_count",
        "exampleResponse": {
            "article": {
                "article_id": 1,
                "author": "butter_bridge",
                "title": "Living in the shadow of a great man",
                "body": "I find this existence challenging",
                "topic": "mitch",
                "created_at": "2020-07-09T21:11:00.000Z",
                "votes": 100,
                "comment_count": 11,
            }
        },
    },
    "PATCH /api/articles/:article_id": {
        "description": "adds inc_votes to the article votes and/or replaces its body (body only by the author, bearer token required)",
        "exampleRequest": {"username": "butter_bridge", "inc_votes": 10, "body": "new text"},
    },
    "DELETE /api/articles/:article_id": {
        "description": "deletes an article and its comments (author only, bearer token required)",
    },
    "GET /api/articles/:article_id/comments": {
        "description": "serves a page of comments for the given article, each carrying the total_count of its comments",
        "queries": _LISTING_QUERIES,
    },
    "POST /api/articles/:article_id/comments": {
        "description": "adds a comment to the article as the logged in user (bearer token required)",
        "exampleRequest": {"username": "butter_bridge", "body": "This is a test"},
    },
    "GET /api/comments": {
        "description": "serves a page of all comments, each carrying the total_count of all comments",
        "queries": _LISTING_QUERIES,
    },
    "GET /api/comments/:comment_id": {
        "description": "serves a single comment",
    },
    "PATCH /api/comments/:comment_id": {
        "description": "adds inc_votes to the comment votes and/or replaces its body (body only by the author, bearer token required)",
        "exampleRequest": {"username": "butter_bridge", "inc_votes": 1},
    },
    "DELETE /api/comments/:comment_id": {
        "description": "deletes a comment (author only, bearer token required)",
    },
    "GET /api/users": {
        "description": "serves an array of all users",
        "exampleResponse": {
            "users": [{"username": "rogersop", "name": "paul", "avatar_url": "https://example.com/a.png"}]
        },
    },
    "POST /api/users": {
        "description": "registers a new user and serves an access token",
        "exampleRequest": {
            "username": "testUser",
            "password": "password",
            "name": "USER",
            "avatar_url": "someAvatar",
        },
        "exampleResponse": {"user": {"username": "testUser", "token": "<jwt>"}},
    },
    "GET /api/users/:username": {
        "description": "serves a single user",
    },
    "PATCH /api/users/:username": {
        "description": "updates name and/or avatar_url of the logged in user (bearer token required)",
        "exampleRequest": {"username": "rogersop", "name": "aName", "avatar_url": "anAvatar!"},
    },
    "POST /api/login": {
        "description": "exchanges username and password for an access token",
        "exampleRequest": {"username": "rogersop", "password": "rogersop1"},
        "exampleResponse": {"user": {"username": "rogersop", "token": "<jwt>"}},
    },
}


@router.get("", summary="사용 가능한 모든 엔드포인트 설명")
async def get_endpoints() -> dict:
    return ENDPOINTS
