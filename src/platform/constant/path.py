from pathlib import Path


# Repository root
BASE_DIR = Path(__file__).resolve().parents[3]

# Log directory, test runs redirect it with TEST_LOG_DIR
LOG_DIR = BASE_DIR / 'logs'

# Settings files, a local .env wins over the committed example
ENV_FILE = BASE_DIR / '.env'
ENV_EXAMPLE_FILE = BASE_DIR / '.env.example'
