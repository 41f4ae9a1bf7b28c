import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-key-change-in-production"
    FLASK_ENV = os.environ.get("FLASK_ENV", "production")
    DEBUG = os.environ.get("FLASK_DEBUG", "False").lower() == "true"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    MAX_CONTENT_LENGTH = 2 * 1024 * 1024  # 2MB of work order JSON is plenty

    # Where the CLI writes rendered forms
    FORMS_OUTPUT_DIR = os.environ.get("FORMS_OUTPUT_DIR", "forms")

    # Letterhead printed at the top of both forms
    SHOP_NAME = os.environ.get("SHOP_NAME", "Humphreys Audio and Vintage Audio Repair")
    SHOP_ADDRESS_LINE = os.environ.get(
        "SHOP_ADDRESS_LINE",
        "16610 Bayview Ave., Unit #7, Newmarket ON   Ph: (416) 923-3777",
    )
    SHOP_CONTACT_LINE = os.environ.get(
        "SHOP_CONTACT_LINE",
        "humphreys.repair@rogers.com/www.humphreysrepaircentre.com",
    )
    WARRANTY_TEXT = os.environ.get(
        "WARRANTY_TEXT", "Warranty: 1 month on replaced parts and labour."
    )

    # Strip creation dates/ids from PDFs so identical input gives identical bytes
    PDF_INVARIANT = os.environ.get("PDF_INVARIANT", "False").lower() == "true"


class DevelopmentConfig(Config):
    DEBUG = True
    FLASK_ENV = "development"
    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    DEBUG = False
    FLASK_ENV = "production"


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key-for-testing-only"
    PDF_INVARIANT = True
    FORMS_OUTPUT_DIR = "forms-test"


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": ProductionConfig,
}
