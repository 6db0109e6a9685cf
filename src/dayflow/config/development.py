import os

from . import env_flag, env_list

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DATABASE_PATH = os.getenv("DATABASE_PATH", "instance/dayflow.db")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also seed demo users on startup
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "1")

# 'absent' forces rejected leave days to absent; 'restore' puts back the pre-leave status.
LEAVE_REJECTION_POLICY = os.getenv("LEAVE_REJECTION_POLICY", "absent")
LEAVE_ALLOW_REDECISION = env_flag("LEAVE_ALLOW_REDECISION", "1")

REMARK_DENYLIST = env_list("REMARK_DENYLIST", "fuck,f*ck,fck")
REMARK_WORD_BOUNDARY = env_flag("REMARK_WORD_BOUNDARY", "0")
