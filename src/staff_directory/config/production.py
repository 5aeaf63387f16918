import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DATA_FILE = os.getenv("DATA_FILE", "users.json")
PORT = int(os.getenv("PORT", "3000"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

ENFORCE_ROLE_ON_GENERAL_UPDATE = bool(int(os.getenv("ENFORCE_ROLE_ON_GENERAL_UPDATE", "0")))
