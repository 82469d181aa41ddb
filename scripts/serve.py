import uvicorn

from logistics.core.config import settings

def main():
    uvicorn.run(
        "logistics.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )

if __name__ == "__main__":
    main()
