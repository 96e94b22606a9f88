from shop_qrcodes.core.database import engine
from shop_qrcodes.models.qr_code import create_tables, metadata


def main():
    create_tables(engine)
    print(f"qr_codes table ready at {engine.url} (tables: {', '.join(metadata.tables)})")


if __name__ == '__main__':
    main()
