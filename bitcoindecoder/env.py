import os


def _int_env(name: str, default: int) -> int:
    # an unparsable value keeps the default, click re-validates its envvar
    try:
        return int(os.environ.get(name, default))
    except ValueError:
        return default


# read once at import; click options fall back to the same variables
LOG_LEVEL = os.environ.get("BITCOIN_DECODER_LOG_LEVEL", "INFO").upper()
LOG_FILE = os.environ.get("BITCOIN_DECODER_LOG_FILE") or None
MAX_WORKERS = _int_env("BITCOIN_DECODER_MAX_WORKERS", os.cpu_count() or 1)
