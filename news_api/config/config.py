from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MySQLConfig(BaseModel):
    host: str = "127.0.0.1"
    user: str = "root"
    passwd: str = ""
    port: int = 3306
    db: str = "nc_news"

    def url(self) -> str:
        return "mysql+asyncmy://{user}:{passwd}@{host}:{port}/{db}?charset=utf8mb4".format(
            user=self.user,
            passwd=self.passwd,
            host=self.host,
            port=self.port,
            db=self.db,
        )


class JwtConfig(BaseModel):
    secret_key: str
    algorithm: str = "HS256"
    expire_minutes: int = 60


class Settings(BaseSettings):
    """
    기본 Configuration
    """

    mysql: MySQLConfig = MySQLConfig()
    # 지정하면 mysql 설정 대신 사용 (ex - 테스트용 sqlite+aiosqlite://)
    database_url: str | None = None
    db_echo: bool = False
    jwt: JwtConfig
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file="news_api/config/.env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    @property
    def sqlalchemy_url(self) -> str:
        return self.database_url or self.mysql.url()


@lru_cache
def get_settings():
    return Settings()
