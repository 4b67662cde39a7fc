import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///nanhai.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Comma-separated list of origins allowed for HTTP and Socket.IO
    CORS_ORIGINS = [o.strip() for o in os.environ.get(
        'CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000'
    ).split(',') if o.strip()]
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/ws')
    # Cap on simultaneous live push connections
    MAX_CONNECTIONS = int(os.environ.get('MAX_CONNECTIONS', '4'))
    # Points given to each distinct contributor when an artifact is completed
    COMPLETION_BONUS = int(os.environ.get('COMPLETION_BONUS', '5'))
    # Attempts for a mutating operation when another writer got there first
    DIVE_MAX_RETRIES = int(os.environ.get('DIVE_MAX_RETRIES', '5'))
    # Optional: fixed seed for fragment draws. Unset means system randomness.
    DIVE_RANDOM_SEED = os.environ.get('DIVE_RANDOM_SEED')
    DOCUMENT_KEY = os.environ.get('DOCUMENT_KEY', 'nanhai')
    # None uses the built-in Nanhai No.1 catalog; a list of dicts overrides it
    ARTIFACT_CATALOG = None
