from loguru import logger

from product_api.app.db import DATABASE_URL, init_db

def main():
    init_db()
    logger.info("DB schema created at {}", DATABASE_URL)

if __name__ == "__main__":
    main()
