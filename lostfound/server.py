import uvicorn

from lostfound.config import HOST, LOG_LEVEL, PORT


def start_server():
    uvicorn.run("lostfound.main:app", host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    start_server()
