"""
Document store initialization script.
"""
from socialapi.core.config import settings
from socialapi.db.session import init_db

if __name__ == "__main__":
    print(f"Initializing document store at {settings.DB_PATH}...")
    store = init_db()
    print(f"Document store ready ({len(store.find_all('users'))} users).")
