from config.env import env, env_get

AMP_CACHES_JSON_URL = env("AMP_CACHES_JSON_URL", default="https://cdn.ampproject.org/caches.json")

# PEM files: PKCS#1 private key, PKIX public key
AMP_PRIVATE_KEY_FILE = env("PRIVATEKEY_FILE", default="")
AMP_PUBLIC_KEY_FILE = env("PUBLICKEY_FILE", default="")
# Inline PEM, used when no files are configured (usually kept in OpenBao)
AMP_PRIVATE_KEY_PEM = env_get("AMP_PRIVATE_KEY_PEM", default="")
AMP_PUBLIC_KEY_PEM = env_get("AMP_PUBLIC_KEY_PEM", default="")

AMP_HTTP_TIMEOUT = env.float("AMP_HTTP_TIMEOUT", default=10.0)  # seconds
AMP_HTTP_USER_AGENT = env("AMP_HTTP_USER_AGENT", default="amp-cache-purger/1.0")

# Bearer token for POST /api/amp-cache/purge; empty disables the API
AMP_PURGE_API_TOKEN = env_get("AMP_PURGE_API_TOKEN", default="")
