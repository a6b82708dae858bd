"""
API data models for the quote API.
Pydantic models for response documentation and the JSON response class.
"""

import json
from typing import Any, Dict

from pydantic import BaseModel, Field
from starlette.responses import JSONResponse


class QuoteJSONResponse(JSONResponse):
    """以标准 json.dumps 分隔符输出的 JSON 响应，例如 {"quote": "Hello"}"""

    media_type = "application/json"

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
        ).encode("utf-8")


class HealthResponse(BaseModel):
    """健康检查响应模型"""
    status: str = Field("healthy", description="服务状态")
    timestamp: str = Field(..., description="检查时间")
    version: str = Field(..., description="服务版本")
    quotes: int = Field(..., description="目录中的语录数量")


class ErrorResponse(BaseModel):
    """错误响应模型"""
    error: str = Field(..., description="错误类型")
    error_code: str = Field(..., description="错误代码")
    timestamp: float = Field(..., description="错误时间戳")
    details: Dict[str, Any] = Field(default_factory=dict, description="错误详情")
