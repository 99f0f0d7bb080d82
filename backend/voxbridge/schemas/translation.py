"""
Translation Schemas
翻译相关的请求/响应模型（JSON 字段使用 camelCase）
"""

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase 别名基类，也接受 snake_case 字段名"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


# ========== Text Translation ==========


class TextTranslateRequest(CamelModel):
    """Text translation request"""

    text: str = Field(min_length=1)
    source_lang: str = Field(min_length=1)  # "auto" 表示自动检测
    target_lang: str = Field(min_length=1)

    @field_validator("text", "source_lang", "target_lang")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class TextTranslateResponse(CamelModel):
    """Text translation response"""

    original_text: str
    translated_text: str
    source_lang: str
    target_lang: str
    timestamp: str
    method: str | None = None
    quality: float = 0.0
    cached: bool = False
    warning: str | None = None


# ========== Languages / Stats ==========


class LanguageItem(BaseModel):
    """Supported language display metadata"""

    name: str
    flag: str


class TranslationStatsResponse(CamelModel):
    """Translation engine counters"""

    total_translations: int
    cache_hits: int
    api_calls: int
    dictionary_fallbacks: int
    deduplicated: int
    cache_hit_rate: str
    cache_size: int


class ServerStatsResponse(CamelModel):
    uptime: float
    connected_clients: int


class StatsResponse(CamelModel):
    translation: TranslationStatsResponse
    server: ServerStatsResponse


class MessageResponse(BaseModel):
    message: str


# ========== Realtime Sessions ==========


class SessionConfigItem(CamelModel):
    source_lang: str
    target_lang: str
    sample_rate: int


class SessionStatusResponse(CamelModel):
    """Realtime session status"""

    client_id: str
    config: SessionConfigItem
    is_recording: bool
    pending_bytes: int
