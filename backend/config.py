import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _split_origins(value):
    origins = [o.strip() for o in value.split(',') if o.strip()]
    if origins == ['*']:
        return '*'
    return origins


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Word list: JSON array or one word per line
    WORD_LIST_PATH = os.environ.get('WORD_LIST_PATH') or os.path.join(BASE_DIR, 'wordduel', 'data', 'words.json')
    WORD_LENGTH = int(os.environ.get('WORD_LENGTH', '5'))
    # A round never holds more than six guesses; the env may only lower it
    MAX_GUESSES = min(int(os.environ.get('MAX_GUESSES', '6')), 6)
    ROOM_CODE_LENGTH = int(os.environ.get('ROOM_CODE_LENGTH', '6'))
    # single_pass keeps the legacy duplicate-letter behaviour; strict caps yellows per letter
    FEEDBACK_MODE = os.environ.get('FEEDBACK_MODE', 'single_pass')
    CORS_ALLOWED_ORIGINS = _split_origins(os.environ.get('CORS_ALLOWED_ORIGINS', '*'))
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '4000'))
