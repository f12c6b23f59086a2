class Languages:
    PRIMARY = 'tr'
    DEFAULT = ('tr', 'en')
    CODE_PATTERN = r'^[a-z]{2}(-[A-Za-z]{2})?$'
    MAX_TEXT_LENGTH = 100


class FallbackNames:
    BY_LANGUAGE = {
        'tr': 'İsimsiz',
    }
    DEFAULT = 'Unnamed'


class CacheConfig:
    KEY_PREFIX = 'categories'
    CHANNEL = 'categories'
    UPDATE_MESSAGE = 'update'
    TTL_SECONDS = 3600
