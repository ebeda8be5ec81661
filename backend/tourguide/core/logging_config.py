"""
日志配置
"""
import logging


class HealthCheckFilter(logging.Filter):
    """过滤健康检查的访问日志"""

    def filter(self, record: logging.LogRecord) -> bool:
        return "/health" not in record.getMessage()


def setup_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("uvicorn.access").addFilter(HealthCheckFilter())
