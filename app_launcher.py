import threading
import time
import webbrowser

import uvicorn

from core.config import settings
from main import app


def open_browser():
    time.sleep(1.5)  # Wait for server to start
    webbrowser.open(f"http://{settings.HOST}:{settings.PORT}")


if __name__ == "__main__":
    if settings.OPEN_BROWSER:
        # Start browser in a separate thread
        threading.Thread(target=open_browser, daemon=True).start()

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
