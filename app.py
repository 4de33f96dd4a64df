from __future__ import annotations
import logging
import sys
from pathlib import Path
from dotenv import load_dotenv
BASE_DIR = Path(__file__).parent.resolve()
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from thracker.api.main import create_app
from thracker.config import Settings

# Run with: uvicorn app:app --reload
load_dotenv()
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = create_app(Settings.from_env())


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
