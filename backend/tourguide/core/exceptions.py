"""
业务异常定义
"""


class TourGuideError(Exception):
    """所有业务异常的基类"""


class UserNotFoundError(TourGuideError):
    """按用户名找不到用户"""

    def __init__(self, user_name: str):
        super().__init__(f"User not found: {user_name}")
        self.user_name = user_name


class ProviderUnavailableError(TourGuideError):
    """外部服务（定位 / 奖励 / 报价）调用失败或超时"""

    def __init__(self, provider: str, detail: str):
        super().__init__(f"{provider} unavailable: {detail}")
        self.provider = provider
        self.detail = detail
