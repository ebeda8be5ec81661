"""
应用配置管理
"""
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    # 测试模式：启动时生成内部测试用户
    TEST_MODE: bool = True
    INTERNAL_USER_NUMBER: int = 100

    # 线程池配置
    TRACKING_POOL_SIZE: int = 50
    REWARDS_POOL_SIZE: int = 100
    REWARDS_BULK_TIMEOUT_SECONDS: float = 20 * 60

    # 后台追踪器轮询间隔
    TRACKING_POLLING_INTERVAL_SECONDS: float = 5 * 60

    # 奖励距离阈值（英里）
    DEFAULT_PROXIMITY_BUFFER_MILES: float = 10
    ATTRACTION_PROXIMITY_RANGE_MILES: float = 200
    NEARBY_ATTRACTIONS_LIMIT: int = 5

    # 外部服务
    TRIP_PRICER_API_KEY: str = "test-server-api-key"
    GPS_SERVICE_URL: str = ""
    PROVIDER_TIMEOUT_SECONDS: float = 10
    # 模拟外部服务的最大延迟（毫秒），0 表示不延迟
    PROVIDER_LATENCY_MS: int = 0

    # 用户存储：配置 REDIS_URL 时使用 Redis
    REDIS_URL: str = ""

    LOG_LEVEL: str = "INFO"

    # CORS 配置
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    
    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
