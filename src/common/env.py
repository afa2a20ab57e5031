from pathlib import Path

from dotenv import load_dotenv


def project_root() -> Path:
    # Assumes src/common/env.py depth = 2
    return Path(__file__).resolve().parents[2]


def load_project_dotenv(override: bool = False):
    root = project_root()
    for name in (".env.local", ".env", "env"):
        p = root / name
        if p.is_file():
            load_dotenv(p, override=override)
            return p
    return None
