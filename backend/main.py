"""
TourGuide 位置追踪与奖励服务 - FastAPI 主入口
业务接口由外部 Web 层提供，这里只负责服务的启动、健康检查和关闭。
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from tourguide.core.config import settings
from tourguide.core.logging_config import setup_logging
from tourguide.core.bootstrap import build_tour_guide_service

setup_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 启动时开启后台追踪器，关闭时停止追踪并释放线程池
    service = build_tour_guide_service(settings)
    app.state.tour_guide_service = service
    try:
        yield
    finally:
        service.shutdown()


app = FastAPI(
    title="TourGuide API",
    description="用户位置追踪与景点奖励服务",
    version="1.0",
    lifespan=lifespan,
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
async def root():
    return {"message": "TourGuide API", "version": "1.0"}

@app.get("/health")
async def health_check():
    service = app.state.tour_guide_service
    return {
        "status": "healthy",
        "tracker_running": service.tracker.is_running,
        "users": len(service.get_all_users()),
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=18000)
