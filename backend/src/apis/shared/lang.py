"""Console label lookup.

Handlers never hard-code user facing text; they resolve a label key through
LangPropsService so the console can be served in the blog's locale.
"""

import logging
import os
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en_US"

LABELS: Dict[str, Dict[str, str]] = {
    "en_US": {
        "addSuccLabel": "Added successfully",
        "updateSuccLabel": "Updated successfully",
        "removeSuccLabel": "Removed successfully",
        "removeFailLabel": "Remove failed",
        "getFailLabel": "Get failed",
        "updateFailLabel": "Update failed",
        "notAllowRegisterLabel": "Registration is not allowed",
        "duplicatedEmailLabel": "Duplicated email",
        "mailInvalidLabel": "Invalid email address",
        "userNameInvalidLabel": "User name must be 1 to 20 characters",
        "changeAdminRoleLabel": "Can not change the role of an administrator",
        "administratorLabel": "Administrator",
        "commonUserLabel": "Common User",
        "visitorUserLabel": "Visitor",
    },
    "zh_CN": {
        "addSuccLabel": "添加成功",
        "updateSuccLabel": "更新成功",
        "removeSuccLabel": "删除成功",
        "removeFailLabel": "删除失败",
        "getFailLabel": "获取失败",
        "updateFailLabel": "更新失败",
        "notAllowRegisterLabel": "不允许注册",
        "duplicatedEmailLabel": "邮箱重复",
        "mailInvalidLabel": "邮箱格式不正确",
        "userNameInvalidLabel": "用户名长度必须为 1 到 20 个字符",
        "changeAdminRoleLabel": "不能修改管理员的角色",
        "administratorLabel": "管理员",
        "commonUserLabel": "普通用户",
        "visitorUserLabel": "访客用户",
    },
}


class LangPropsService:
    """Resolves label keys to messages for a single locale."""

    def __init__(self, locale: Optional[str] = None):
        self.locale = locale or os.getenv("CONSOLE_LOCALE", DEFAULT_LOCALE)
        if self.locale not in LABELS:
            logger.warning(f"Unknown console locale {self.locale}, falling back to {DEFAULT_LOCALE}")
            self.locale = DEFAULT_LOCALE
        self._labels = LABELS[self.locale]

    def get(self, key: str) -> str:
        """Return the message for key, or the key itself when it has no entry."""
        value = self._labels.get(key)
        if value is None:
            logger.debug(f"Missing label {key} for locale {self.locale}")
            return key
        return value
