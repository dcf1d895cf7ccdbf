from __future__ import annotations

import os
from dataclasses import dataclass


MONGO_URI_ENV = "MONGO_URI"
MONGO_DB_NAME_ENV = "MONGO_DB_NAME"


@dataclass(slots=True)
class MongoConfig:
    uri: str
    db_name: str | None = None


def load_mongo_config() -> MongoConfig:
    """MongoDB 연결 설정을 환경 변수에서 읽는다.

    - MONGO_URI 는 필수이며, 없으면 RuntimeError 로 즉시 실패한다.
    - MONGO_DB_NAME 이 비어 있으면 None 이 되고, 클라이언트는 URI 의 기본 DB 를 사용한다.
    """

    uri = os.getenv(MONGO_URI_ENV, "").strip()
    if not uri:
        raise RuntimeError(
            f"{MONGO_URI_ENV} environment variable is required when KV_STORE_BACKEND=mongo",
        )
    db_name = os.getenv(MONGO_DB_NAME_ENV, "").strip() or None
    return MongoConfig(uri=uri, db_name=db_name)
