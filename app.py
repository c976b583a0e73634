import os
import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src" / "employee_portal"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from employee_portal.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "5000")), threaded=True)
