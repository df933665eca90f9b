import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Phase timers (seconds)
    PICKING_DURATION_SEC = int(os.environ.get('PICKING_DURATION_SEC', '10'))
    REVIEW_DURATION_SEC = int(os.environ.get('REVIEW_DURATION_SEC', '5'))
    # Minimum eligible players before a round starts (never below 2)
    MIN_PLAYERS = int(os.environ.get('MIN_PLAYERS', '2'))
    # Cap on frames rendered per connection per second
    MAX_FPS = int(os.environ.get('MAX_FPS', '20'))
    CORS_ALLOWED_ORIGINS = [
        o.strip() for o in os.environ.get(
            'CORS_ALLOWED_ORIGINS',
            'http://localhost:5173,http://127.0.0.1:5173',
        ).split(',') if o.strip()
    ]
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Optional zero-argument callable returning seconds; None uses time.time
    RPS_CLOCK = None
