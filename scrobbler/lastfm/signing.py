import hashlib

from .params import ParameterSet

SIGNATURE_KEY = "api_sig"

# Never part of the signature input.
UNSIGNED_KEYS = frozenset({SIGNATURE_KEY, "format", "callback"})


def sign(params: ParameterSet, secret: str) -> str:
    """Compute the request signature for a parameter set.

    Each key is concatenated with its value in ascending key order, the shared
    secret is appended, and the MD5 hex digest of the UTF-8 bytes is returned.
    """
    payload = "".join(f"{k}{v}" for k, v in params.items() if k not in UNSIGNED_KEYS)
    payload += secret
    return hashlib.md5(payload.encode("utf-8")).hexdigest()


def signed(params: ParameterSet, secret: str) -> ParameterSet:
    """Return a copy of ``params`` carrying its signature under ``api_sig``."""
    result = params.copy()
    result[SIGNATURE_KEY] = sign(params, secret)
    return result
