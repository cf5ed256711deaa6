import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hris_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
CORS_ALLOW_ORIGIN = "*"

AI_GATEWAY_URL = "http://ai.test/v1"
AI_API_KEY = "test-ai-key"
AI_MODEL = "test-model"

EMAIL_API_URL = "http://email.test/emails"
EMAIL_API_KEY = "test-email-key"
EMAIL_FROM = "HRIS <noreply@test.local>"

HTTP_TIMEOUT = 5

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
