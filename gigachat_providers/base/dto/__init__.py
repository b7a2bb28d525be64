"""Pydantic DTOs for provider wire shapes."""

from .access_token import AccessTokenDTO
from .function_call import FunctionCallDTO
from .function_spec import FunctionSpecDTO
from .uploaded_file import UploadedFileDTO

__all__ = [
    "AccessTokenDTO",
    "FunctionCallDTO",
    "FunctionSpecDTO",
    "UploadedFileDTO",
]
