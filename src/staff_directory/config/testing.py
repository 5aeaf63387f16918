import os

SECRET_KEY = "test-secret"

DATA_FILE = os.getenv("DATA_FILE", "test_users.json")
PORT = 3000

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_SEED_DB = False

ENFORCE_ROLE_ON_GENERAL_UPDATE = False
