import os

SECRET_KEY = "test-secret"

DATABASE_PATH = os.getenv("DATABASE_PATH", "instance/dayflow-test.db")

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = True
AUTO_SEED_DB = False

LEAVE_REJECTION_POLICY = "absent"
LEAVE_ALLOW_REDECISION = True

REMARK_DENYLIST = ["fuck", "f*ck", "fck"]
REMARK_WORD_BOUNDARY = False
