import uvicorn

from spendwise.core.config import settings


def main():
    uvicorn.run("spendwise.main:app", host="0.0.0.0", port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
