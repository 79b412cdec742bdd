import os
import uvicorn

if __name__ == "__main__":
    # 开发环境默认热重载，生产环境设置 RELOAD=false
    is_dev = os.getenv("RELOAD", "true").lower() == "true"

    uvicorn.run(
        "app.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=is_dev,
        log_level="info"
    )
