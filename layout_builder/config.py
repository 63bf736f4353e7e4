"""Configuration — variables d'environnement."""
import os
from pathlib import Path

DATA_DIR = Path(os.getenv("DATA_DIR", str(Path(__file__).parent.parent / "data")))

DB_PATH = os.getenv("DB_PATH", str(DATA_DIR / "layout_builder.db"))

# Service de persistance distant (HttpPageStore)
PAGES_API_URL   = os.getenv("PAGES_API_URL", "http://localhost:8000/api")
PAGES_API_TOKEN = os.getenv("PAGES_API_TOKEN", "")
HTTP_TIMEOUT    = float(os.getenv("HTTP_TIMEOUT", "15"))

# Durée d'affichage des statuts de sauvegarde (secondes)
SAVE_STATUS_TTL = float(os.getenv("SAVE_STATUS_TTL", "3"))

# Compteur d'ids : démarre au-dessus des ids des layouts de départ
ID_BASELINE = int(os.getenv("ID_BASELINE", "1000"))

LAYOUT_VERSION = 2
