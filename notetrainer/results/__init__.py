from .schema import (
    DailyProgress,
    TestResult,
    date_key,
    decode_daily,
    decode_result,
    encode_daily,
    encode_result,
)
from .result_manager import DEFAULT_PLAYER_NAME, ResultStore

__all__ = [
    "DailyProgress",
    "TestResult",
    "date_key",
    "decode_daily",
    "decode_result",
    "encode_daily",
    "encode_result",
    "DEFAULT_PLAYER_NAME",
    "ResultStore",
]
