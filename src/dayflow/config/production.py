import os

from . import env_flag, env_list

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DATABASE_PATH = os.getenv("DATABASE_PATH", "/var/lib/dayflow/dayflow.db")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")

LEAVE_REJECTION_POLICY = os.getenv("LEAVE_REJECTION_POLICY", "absent")
LEAVE_ALLOW_REDECISION = env_flag("LEAVE_ALLOW_REDECISION", "1")

REMARK_DENYLIST = env_list("REMARK_DENYLIST", "fuck,f*ck,fck")
REMARK_WORD_BOUNDARY = env_flag("REMARK_WORD_BOUNDARY", "0")
