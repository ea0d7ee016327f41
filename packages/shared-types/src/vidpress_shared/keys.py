"""
Object key conventions.

Output key format: processed-{source_key}

Source keys double as local scratch filenames, so is_safe_object_key is the
single check that keeps a key inside its scratch directory.
"""

OUTPUT_KEY_PREFIX = "processed-"
MAX_OBJECT_KEY_BYTES = 1024


def build_output_key(source_key: str) -> str:
    """Return the processed-bucket key for a raw-bucket key."""
    return f"{OUTPUT_KEY_PREFIX}{source_key}"


def is_safe_object_key(key: str) -> bool:
    """
    Return True if key can be used as a flat local filename.

    Rejects empty keys, path separators, "." and "..", NUL bytes, and keys
    longer than the object storage limit (1024 bytes UTF-8).
    """
    if not key or key in (".", ".."):
        return False
    if "/" in key or "\\" in key or "\x00" in key:
        return False
    return len(key.encode("utf-8")) <= MAX_OBJECT_KEY_BYTES
