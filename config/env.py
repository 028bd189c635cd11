import environ
import logging
from functools import lru_cache

import hvac
from hvac.exceptions import VaultError

log = logging.getLogger(__name__)

env = environ.Env()

BASE_DIR = environ.Path(__file__) - 2
APPS_DIR = BASE_DIR.path("src")


# OpenBao connection (container vs host)
OPENBAO_ADDR = env("OPENBAO_ADDR", default="http://127.0.0.1:8200")
# Auth options: use OPENBAO_TOKEN for dev; prefer AppRole in prod (role+secret IDs)
OPENBAO_TOKEN = env("OPENBAO_TOKEN", default="")
OPENBAO_ROLE_ID = env("OPENBAO_ROLE_ID", default="")
OPENBAO_SECRET_ID = env("OPENBAO_SECRET_ID", default="")
# KV v2 mount/path holding the purger secrets (signing key PEMs, API token)
OPENBAO_KV_MOUNT = env("OPENBAO_KV_MOUNT", default="secret")
OPENBAO_KV_PATH = env("OPENBAO_KV_PATH", default="amp-purger")
# Off by default so local runs and tests never reach for a vault
OPENBAO_ENABLED = env.bool("OPENBAO_ENABLED", default=False)


def _bao_client() -> hvac.Client:
    return hvac.Client(url=OPENBAO_ADDR, timeout=5)


def _bao_auth(c: hvac.Client) -> None:
    # Priority: token (simple), else AppRole (prod), else unauth (will fail on read)
    if OPENBAO_TOKEN:
        c.token = OPENBAO_TOKEN
        return
    if OPENBAO_ROLE_ID and OPENBAO_SECRET_ID:
        resp = c.auth.approle.login(role_id=OPENBAO_ROLE_ID, secret_id=OPENBAO_SECRET_ID)
        c.token = resp["auth"]["client_token"]


@lru_cache(maxsize=32)
def bao_read_kv(path=None):
    """
    Read KV v2 dict at {OPENBAO_KV_MOUNT}/{path or OPENBAO_KV_PATH}.
    Cached per process.
    """
    c = _bao_client()
    _bao_auth(c)
    target_path = path or OPENBAO_KV_PATH
    resp = c.secrets.kv.v2.read_secret_version(mount_point=OPENBAO_KV_MOUNT, path=target_path)
    return resp["data"]["data"] or {}


def env_get(name: str, default=None, *, kv_path=None, prefer_env: bool = True):
    """
    Unified accessor:
      1) .env / environment (via django-environ) if prefer_env and present
      2) OpenBao KV v2, when OPENBAO_ENABLED
      3) default
    """
    if prefer_env:
        val = env(name, default=None)
        if val is not None:
            return val
    if not OPENBAO_ENABLED:
        return default
    try:
        data = bao_read_kv(kv_path)
    except (VaultError, OSError) as e:
        log.warning("env_get: OpenBao fallback failed for %s: %s (using default)", name, e)
        return default
    return data.get(name, default)
