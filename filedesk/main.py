from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware
from starlette.staticfiles import StaticFiles

from filedesk.config.config_settings.config_loader import get_app_config
from filedesk.config.config_settings.config_schema import AppConfig
from filedesk.core.api_response import response_error
from filedesk.core.exceptions import BaseBusinessException
from filedesk.core.logger import configure_file_logging, logger
from filedesk.core.response_codes import ResponseCodeEnum
from filedesk.db.session import Database
from filedesk.infra.storage.storage_factory import StorageFactory
from filedesk.rest import build_api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 应用启动中，正在初始化资源...")
    configure_file_logging(app.state.config.logging)

    database: Database = app.state.database
    await database.create_db_and_tables()
    logger.info("✅ 所有资源初始化完成")

    yield

    await database.dispose()
    logger.info("🛑 应用已关闭，数据库连接已释放")


def mount_local_storage(app: FastAPI, factory: StorageFactory) -> None:
    """把配置了 mount_path 的本地存储目录以只读方式暴露出来，使 download_url 可以直接访问。"""
    for name, client in factory.local_clients().items():
        mount_path = client.params.mount_path
        if not mount_path:
            continue
        base_path = Path(client.params.base_path)
        base_path.mkdir(parents=True, exist_ok=True)
        app.mount(mount_path, StaticFiles(directory=base_path), name=f"storage-{name}")
        logger.info(f"Serving local storage '{name}' from {base_path} at {mount_path}")


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    config = config or get_app_config()

    app = FastAPI(title="filedesk", lifespan=lifespan)
    app.state.config = config
    app.state.database = Database(config.database)
    app.state.storage_factory = StorageFactory(config)

    @app.exception_handler(BaseBusinessException)
    async def business_exception_handler(request: Request, exc: BaseBusinessException):
        logger.warning(f"Business Exception | code: {exc.code}, message: {exc.message}, path: {request.url.path}")
        return response_error(exc)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.opt(exception=exc).error(f"Unhandled Exception | {repr(exc)} | path: {request.url.path}")
        return JSONResponse(
            status_code=ResponseCodeEnum.SERVER_ERROR.http_status,
            content={
                "code": ResponseCodeEnum.SERVER_ERROR.code,
                "message": ResponseCodeEnum.SERVER_ERROR.message,
                "variables": [],
                "cause": None,
                "data": None,
            },
        )

    @app.get("/api/health", tags=["health"])
    async def health():
        return {"status": "ok"}

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(build_api_router(), prefix=config.server.api_prefix)
    mount_local_storage(app, app.state.storage_factory)
    return app


if __name__ == "__main__":
    import uvicorn

    server = get_app_config().server
    uvicorn.run("filedesk.main:create_app", factory=True, host=server.host, port=server.port, log_level=server.log_level)
