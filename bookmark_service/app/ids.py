from __future__ import annotations

import base64
import uuid


# 라벨 ID 에 사용하는 base32 변형 알파벳 (표준 base32 알파벳과 1:1 매핑)
ID_ALPHABET = "ybndrfg8ejkmcpqxot1uwisza345h769"
ID_LENGTH = 26

_STD_BASE32_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
_TRANSLATION = str.maketrans(_STD_BASE32_ALPHABET, ID_ALPHABET)


def new_id() -> str:
    """전역적으로 유일한 26자리 ID 를 생성한다.

    - UUID v4(128bit) 를 커스텀 알파벳으로 base32 인코딩한다.
    - 16바이트 인코딩 결과(32자) 중 뒤쪽 '======' 패딩을 잘라 26자만 사용한다.
    - 기존 ID 와의 충돌 검사는 하지 않는다.
    """

    encoded = base64.b32encode(uuid.uuid4().bytes).decode("ascii")
    return encoded[:ID_LENGTH].translate(_TRANSLATION)
