import re

# RFC 1123 subdomain, the format Kubernetes requires for pod names
POD_NAME_RE = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*$")
POD_NAME_MAX_LENGTH = 253

LABEL_NAME_RE = re.compile(r"^[A-Za-z0-9]([-A-Za-z0-9_.]*[A-Za-z0-9])?$")
LABEL_NAME_MAX_LENGTH = 63
LABEL_PREFIX_MAX_LENGTH = 253


def is_pod_name(value: str) -> bool:
    return len(value) <= POD_NAME_MAX_LENGTH and bool(POD_NAME_RE.fullmatch(value))


def is_label_key(value: str) -> bool:
    """Check a label key of the form `[prefix/]name`."""
    prefix, sep, name = value.rpartition("/")
    if sep and (not prefix or len(prefix) > LABEL_PREFIX_MAX_LENGTH or not POD_NAME_RE.fullmatch(prefix)):
        return False
    return len(name) <= LABEL_NAME_MAX_LENGTH and bool(LABEL_NAME_RE.fullmatch(name))


def is_label_value(value: str) -> bool:
    """Check a label value: empty, or up to 63 characters starting and ending with an alphanumeric."""
    return not value or (len(value) <= LABEL_NAME_MAX_LENGTH and bool(LABEL_NAME_RE.fullmatch(value)))
