from pathlib import Path


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent

# Log directory
LOG_DIR = BASE_DIR / 'logs'

# Local state directory (client-side counterpart of browser localStorage)
LOCAL_STATE_DIR = BASE_DIR / 'local_state'
