"""
Core interpreter benchmarks: arithmetic, control flow, strings,
collections, regular expressions, type checks, hashing and JSON.
"""

import base64
import codecs
import csv
import hashlib
import html
import json
import math
import random
import re
import zlib
from collections import Counter

from ..benchmark.base import CaseOutcome

SAMPLE_STRING = "<i>the</i> quick brown fox jumps over the lazy dog  "

LINK_TEXT = "this is a link to https://google.com which is a really popular site"
LINK_PATTERN = r"http[s]?://\w+[^\s\[\]<]+"
LINK_REPLACE_PATTERN = r"(^|\s)(http[s]?://\w+[^\s\[\]<]+)"

# Filtered at run time to what this build can construct
HASH_ALGORITHMS = (
    "md5",
    "sha1",
    "sha224",
    "sha256",
    "sha384",
    "sha512",
    "sha3_256",
    "sha3_512",
    "blake2b",
    "blake2s",
    "ripemd160",
    "sm3",
)

JSON_DATA = {
    "foo": "bar",
    "bar": "baz",
    "baz": "qux",
    "qux": "quux",
    "quux": "corge",
    "corge": "grault",
    "grault": "garply",
    "garply": "waldo",
    "waldo": "fred",
    "fred": "plugh",
    "plugh": "xyzzy",
    "xyzzy": "thud",
    "thud": "end",
}


def bench_math(count, ctx):
    """Integer/float arithmetic and the math module."""
    x = 0
    for i in range(count):
        f = i / count
        x += i + i
        x += i * i
        x += i ** 2
        x += i / ((i + 1) * 2)
        x += i % ((i + 1) * 2)
        abs(i)
        math.acos(f)
        math.acosh(i + 1)
        math.asin(f)
        math.asinh(i)
        math.atan2(i, i + 1)
        math.atan(i)
        math.atanh(f)
        math.ceil(f)
        math.cos(i)
        math.cosh(f)
        bin(i)
        hex(i)
        oct(i)
        math.radians(i)
        math.exp(f)
        math.expm1(f)
        math.floor(f)
        math.fmod(i, i + 1)
        math.hypot(i, i)
        math.isinf(f)
        math.isfinite(f)
        math.isnan(f)
        math.log10(i + 1)
        math.log1p(i)
        math.log(i + 1)
        math.pow(f, 2)
        math.degrees(i)
        math.sin(i)
        math.sinh(f)
        math.sqrt(i)
        math.tan(i)
        math.tanh(i)
    return CaseOutcome.success(x)


def bench_loops(count, ctx):
    for i in range(count):
        pass
    i = 0
    while i < count:
        i += 1
    return CaseOutcome.success(i)


def bench_ifelse(count, ctx):
    a = 0
    b = 0
    for i in range(count):
        k = i % 4
        if k == 0:
            pass
        elif k == 1:
            a = i
        elif k == 2:
            b = i
        else:
            pass
    return CaseOutcome.success(a - b)


def bench_match(count, ctx):
    a = 0
    b = 0
    for i in range(count):
        match i % 4:
            case 0:
                pass
            case 1:
                a = i
            case 2:
                b = i
            case _:
                pass
    return CaseOutcome.success(a - b)


def bench_string(count, ctx):
    """str methods and string-oriented stdlib helpers."""
    s = SAMPLE_STRING
    for _ in range(count):
        s.replace("'", "\\'")
        s.encode().hex()
        "\r\n".join(s[j:j + 76] for j in range(0, len(s), 76))
        base64.b64decode(base64.b64encode(s.encode()))
        Counter(s)
        s.split(" ")
        html.escape(s)
        hashlib.md5(s.encode()).hexdigest()
        ord(s[0])
        s.rstrip()
        hashlib.sha1(s.encode()).hexdigest()
        next(csv.reader([s]))
        re.sub("fox", "cat", s, flags=re.IGNORECASE)
        s.ljust(50)
        s * 10
        s.replace("fox", "cat")
        codecs.encode(s, "rot13")
        "".join(random.sample(s, len(s)))
        len(s.split())
        re.sub(r"<[^>]+>", "", s)
        s.find("fox")
        len(s)
        s.lower()
        s.upper()
        s.count("the")
        s.strip()
        s.capitalize()
        s.title()
    return CaseOutcome.success(s)


def bench_list(count, ctx):
    """List and dict manipulation over a small collection."""
    a = list(range(101))
    for _ in range(count):
        list(dict.fromkeys(a))
        list(a)
        {v: k for k, v in enumerate(a)}
        list(map(lambda e: None, a))
        for e in a:
            pass
        a[::-1]
        sum(a)
        a + [101, 102, 103]
        [1, 2, 3] + a[3:]
        [a[j:j + 2] for j in range(0, len(a), 2)]
    return CaseOutcome.success(a)


def bench_regex(count, ctx):
    for _ in range(count):
        re.search(LINK_PATTERN, LINK_TEXT)
        re.sub(LINK_REPLACE_PATTERN, r'\1<a href="\2">\2</a>', LINK_TEXT, flags=re.IGNORECASE)
    return CaseOutcome.success(count)


def bench_isinstance(count, ctx):
    o = object()
    for _ in range(count):
        isinstance([1], list)
        isinstance("1", list)
        isinstance(1, int)
        isinstance("abc", int)
        isinstance("foo", str)
        isinstance(123, str)
        isinstance(True, bool)
        isinstance(5, bool)
        "hi".isnumeric()
        "123".isnumeric()
        isinstance(1.3, float)
        isinstance(0, float)
        isinstance(o, object)
        callable(o)
    return CaseOutcome.success(o)


def _usable_algorithms():
    """Listed algorithms that can actually be constructed (OpenSSL may list legacy ones)."""
    usable = []
    for name in HASH_ALGORITHMS:
        if name not in hashlib.algorithms_available:
            continue
        try:
            hashlib.new(name)
        except ValueError:
            continue
        usable.append(name)
    return usable


def bench_hash(count, ctx):
    algorithms = _usable_algorithms()

    for i in range(count):
        data = str(i).encode()
        for name in algorithms:
            hashlib.new(name, data).hexdigest()
        zlib.crc32(data)
        zlib.adler32(data)
    return CaseOutcome.success(count)


def bench_json(count, ctx):
    for _ in range(count):
        json.dumps(JSON_DATA)
        json.loads(json.dumps(JSON_DATA))
    return CaseOutcome.success(JSON_DATA)


# name -> (case body, base iteration count)
BENCHMARKS = {
    "math": (bench_math, 50_000),
    "loops": (bench_loops, 5_000_000),
    "ifelse": (bench_ifelse, 2_000_000),
    "match": (bench_match, 2_000_000),
    "string": (bench_string, 20_000),
    "list": (bench_list, 10_000),
    "regex": (bench_regex, 200_000),
    "isinstance": (bench_isinstance, 500_000),
    "hash": (bench_hash, 10_000),
    "json": (bench_json, 50_000),
}
