import logging

from app.db.engine import get_engine
from app.db.schema import init_db

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)

def main():
    init_db(get_engine())
    print("DB schema ready.")

if __name__ == "__main__":
    main()
