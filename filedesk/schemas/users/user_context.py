# 专门用于接口上下文中注入当前调用者的身份和权限信息
from typing import List

from pydantic import BaseModel


class UserContext(BaseModel):
    id: str
    capabilities: List[str] = []
    is_superuser: bool = False

    def can(self, capability: str) -> bool:
        return self.is_superuser or capability in self.capabilities
