"""Tests for signing.py — canonical form, determinism, sensitivity."""
import hashlib
import itertools

from guanaitong_openapi.signing import canonicalize, sign


COMMON = {"appid": "app-1", "timestamp": 1700000000, "access_token": "tok"}
BUSINESS = {"mobile": "17762200002", "name": "Zhang"}


def _sha1(text):
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


# ── Canonical form ───────────────────────────────────────────────────

def test_canonicalize_sorts_and_joins():
    result = canonicalize("s3cret", {"timestamp": 1, "appid": "a"}, {})
    assert result == "appid=a&appsecret=s3cret&timestamp=1"


def test_canonicalize_includes_business_params():
    result = canonicalize("s", {"appid": "a"}, {"mobile": "138"})
    assert result == "appid=a&appsecret=s&mobile=138"


def test_canonicalize_sorts_full_pairs_not_keys():
    # "a-b=2" sorts before "a=1" because '-' < '='
    result = canonicalize("s", {"a": 1}, {"a-b": 2})
    assert result == "a-b=2&a=1&appsecret=s"


def test_canonicalize_ignores_existing_sign():
    with_sign = canonicalize("s", {**COMMON, "sign": "deadbeef"}, BUSINESS)
    assert with_sign == canonicalize("s", COMMON, BUSINESS)
    assert "sign=" not in with_sign


def test_json_body_signs_as_single_key():
    body = '{"a":1,"b":"x"}'
    result = canonicalize("s", {"appid": "a"}, {"_body": body})
    assert result == f'_body={body}&appid=a&appsecret=s'


# ── sign ─────────────────────────────────────────────────────────────

def test_sign_is_sha1_hex_of_canonical_form():
    expected = _sha1("appid=a&appsecret=s3cret&timestamp=1")
    assert sign("s3cret", {"appid": "a", "timestamp": 1}, {}) == expected


def test_sign_is_lowercase_hex():
    signature = sign("s", COMMON, BUSINESS)
    assert len(signature) == 40
    assert signature == signature.lower()
    int(signature, 16)


def test_sign_independent_of_insertion_order():
    items = list({**COMMON, **BUSINESS}.items())
    signatures = {
        sign("s", dict(perm), {})
        for perm in itertools.permutations(items)
    }
    assert len(signatures) == 1


def test_sign_same_whether_param_is_common_or_business():
    assert sign("s", COMMON, BUSINESS) == sign("s", {**COMMON, **BUSINESS}, {})


def test_sign_changes_with_any_value():
    base = sign("s", COMMON, BUSINESS)
    for key in COMMON:
        changed = {**COMMON, key: f"{COMMON[key]}x"}
        assert sign("s", changed, BUSINESS) != base
    for key in BUSINESS:
        changed = {**BUSINESS, key: f"{BUSINESS[key]}x"}
        assert sign("s", COMMON, changed) != base


def test_sign_changes_with_secret():
    assert sign("s1", COMMON, BUSINESS) != sign("s2", COMMON, BUSINESS)
