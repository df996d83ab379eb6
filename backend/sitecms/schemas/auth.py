from typing import Optional

from pydantic import ConfigDict

from .base import RequestModel


class LoginInput(RequestModel):
    # passwords are compared byte for byte
    model_config = ConfigDict(str_strip_whitespace=False)

    email: Optional[str] = None
    password: Optional[str] = None


class ChangePasswordInput(RequestModel):
    model_config = ConfigDict(str_strip_whitespace=False)

    current_password: Optional[str] = None
    new_password: Optional[str] = None
