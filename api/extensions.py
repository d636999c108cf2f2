"""
Deferred extension instances, bound to the app in create_app() via init_app().
"""
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Default limit is filled in from RATELIMIT_DEFAULT, built from the app config
limiter = Limiter(key_func=get_remote_address)
