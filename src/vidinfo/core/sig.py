"""Signature decipherment from the html5 player script.

The player obfuscates stream signatures with a short sequence of string
operations (reverse, slice, splice, swap). The sequence is recovered once per
player script as a list of tokens such as ``["r", "w23", "s2"]`` and then
replayed on every ciphered signature.
"""

import logging
import re
from typing import List, Optional
from urllib.parse import parse_qs, urlparse, urlencode, urlunparse

from .cache import InfoCache
from .errors import DecipherError
from .models import Format, InfoOptions

logger = logging.getLogger(__name__)

# Tokens per player script URL
token_cache = InfoCache(maxsize=32)

JS_VAR = r'[a-zA-Z_\$][a-zA-Z_0-9]*'
JS_SINGLE_QUOTE = r"'[^'\\]*(?:\\[\s\S][^'\\]*)*'"
JS_DOUBLE_QUOTE = r'"[^"\\]*(?:\\[\s\S][^"\\]*)*"'
JS_QUOTE = f'(?:{JS_SINGLE_QUOTE}|{JS_DOUBLE_QUOTE})'
JS_KEY = f'(?:{JS_VAR}|{JS_QUOTE})'
JS_PROP = f'(?:\\.{JS_VAR}|\\[{JS_QUOTE}\\])'
JS_EMPTY = r"(?:''|\"\")"

REVERSE = r':function\(a\)\{(?:return )?a\.reverse\(\)\}'
SLICE = r':function\(a,b\)\{return a\.slice\(b\)\}'
SPLICE = r':function\(a,b\)\{a\.splice\(0,b\)\}'
SWAP = (r':function\(a,b\)\{var c=a\[0\];a\[0\]=a\[b(?:%a\.length)?\];'
        r'a\[b(?:%a\.length)?\]=c(?:;return a)?\}')

ACTIONS_OBJ = re.compile(
    f'var ({JS_VAR})=\\{{((?:(?:{JS_KEY}{REVERSE}|{JS_KEY}{SLICE}|{JS_KEY}{SPLICE}|{JS_KEY}{SWAP}),?\\r?\\n?)+)\\}};'
)
ACTIONS_FUNC = re.compile(
    f'function(?: {JS_VAR})?\\(a\\)\\{{a=a\\.split\\({JS_EMPTY}\\);\\s*'
    f'((?:(?:a=)?{JS_VAR}{JS_PROP}\\(a,\\d+\\);)+)'
    f'return a\\.join\\({JS_EMPTY}\\)\\}}'
)

REVERSE_KEY = re.compile(f'(?:^|,)({JS_KEY}){REVERSE}', re.M)
SLICE_KEY = re.compile(f'(?:^|,)({JS_KEY}){SLICE}', re.M)
SPLICE_KEY = re.compile(f'(?:^|,)({JS_KEY}){SPLICE}', re.M)
SWAP_KEY = re.compile(f'(?:^|,)({JS_KEY}){SWAP}', re.M)


def _key(match: Optional[re.Match]) -> str:
    if not match:
        return ''
    return match.group(1).strip('\'"')


def extract_actions(body: str) -> Optional[List[str]]:
    """Recover the decipher token list from a player script body."""
    obj_match = ACTIONS_OBJ.search(body)
    func_match = ACTIONS_FUNC.search(body)
    if not obj_match or not func_match:
        return None

    obj = re.escape(obj_match.group(1))
    obj_body = obj_match.group(2)
    func_body = func_match.group(1)

    keys = {
        'r': _key(REVERSE_KEY.search(obj_body)),
        's': _key(SLICE_KEY.search(obj_body)),
        'p': _key(SPLICE_KEY.search(obj_body)),
        'w': _key(SWAP_KEY.search(obj_body)),
    }
    names = {name: prefix for prefix, name in keys.items() if name}
    if not names:
        return None

    known = '|'.join(re.escape(name) for name in names)
    call = re.compile(f'(?:a=)?{obj}(?:\\.({known})|\\[\'({known})\'\\]|\\["({known})"\\])\\(a,(\\d+)\\)')
    tokens = []
    for m in call.finditer(func_body):
        prefix = names[m.group(1) or m.group(2) or m.group(3)]
        tokens.append(prefix if prefix == 'r' else f'{prefix}{m.group(4)}')
    return tokens


def get_tokens(html5player_url: str, options: InfoOptions, transport) -> List[str]:
    """Fetch the player script and extract its decipher tokens."""
    cached = token_cache.get(html5player_url)
    if cached is not None:
        return cached
    body = transport.get_text(html5player_url, options.request_options)
    tokens = extract_actions(body)
    if not tokens:
        raise DecipherError('Could not extract signature deciphering actions')
    logger.debug("Extracted %d decipher tokens from %s", len(tokens), html5player_url)
    token_cache.set(html5player_url, tokens)
    return tokens


def decipher(tokens: List[str], signature: str) -> str:
    """Replay the token operations on a signature."""
    sig = list(signature)
    for token in tokens:
        op, pos = token[0], int(token[1:] or 0)
        if op == 'r':
            sig.reverse()
        elif op == 'w':
            pos %= len(sig)
            sig[0], sig[pos] = sig[pos], sig[0]
        elif op in ('s', 'p'):
            sig = sig[pos:]
        else:
            raise DecipherError(f'Unknown decipher token: {token}')
    return ''.join(sig)


def _set_query(url: str, **params) -> str:
    parts = urlparse(url)
    query = parse_qs(parts.query, keep_blank_values=True)
    for key, value in params.items():
        query[key] = [value]
    return urlunparse(parts._replace(query=urlencode(query, doseq=True)))


def decipher_format(fmt: Format, tokens: List[str], debug: bool = False) -> Format:
    """Return a copy of the format with its playable url resolved."""
    result = dict(fmt)
    cipher_str = fmt.get('signatureCipher') or fmt.get('cipher')
    if cipher_str:
        cipher = {k: v[0] for k, v in parse_qs(cipher_str).items()}
        url = cipher.get('url')
        if not url:
            return result
        extra = {}
        if cipher.get('s'):
            signature = decipher(tokens, cipher['s'])
            extra[cipher.get('sp') or 'signature'] = signature
            if debug:
                logger.debug("itag %s: decipher %s -> %s", fmt.get('itag'), cipher['s'], signature)
        elif cipher.get('sig'):
            extra['signature'] = cipher['sig']
        result['url'] = url
        result.pop('signatureCipher', None)
        result.pop('cipher', None)
        fmt_url = url
    else:
        fmt_url = fmt.get('url')
        extra = {}
        if not fmt_url:
            return result
    if 'ratebypass' not in fmt_url:
        extra['ratebypass'] = 'yes'
    result['url'] = _set_query(fmt_url, **extra)
    return result


def decipher_formats(formats: List[Format], tokens: List[str], debug: bool = False) -> List[Format]:
    """Decipher every format, leaving the inputs untouched."""
    return [decipher_format(fmt, tokens, debug) for fmt in formats]
