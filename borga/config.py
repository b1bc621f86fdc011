import os


def _optional_int(value):
    return int(value) if value else None


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-prod')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Admission gate in front of the game catalog
    GATE_BASE_DELAY = float(os.getenv('GATE_BASE_DELAY', '2'))
    GATE_MAX_DEPTH = _optional_int(os.getenv('GATE_MAX_DEPTH'))

    # Game catalog
    CATALOG_BASE_URL = os.getenv('CATALOG_BASE_URL', 'https://api.boardgameatlas.com/api')
    CATALOG_CLIENT_ID = os.getenv('CATALOG_CLIENT_ID', '')
    CATALOG_TIMEOUT = float(os.getenv('CATALOG_TIMEOUT', '10'))


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    DEBUG = False
    TESTING = True
    GATE_BASE_DELAY = 0
    CATALOG_BASE_URL = 'http://catalog.test/api'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
