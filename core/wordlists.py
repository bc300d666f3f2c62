import logging
from typing import Dict, Iterable, List, Optional, Tuple

from core.exceptions import HeaderParseError, ResourceError

logger = logging.getLogger(__name__)

EXTENSION_MARKER = "%"


def read_lines(file_path: str) -> List[str]:
    """
    Reads a newline-delimited file, dropping blank lines and '#' comments.

    Args:
        file_path (str): Path of the file to read.

    Returns:
        List[str]: The remaining lines, stripped, in file order.

    Raises:
        ResourceError: If the file cannot be opened or decoded.
    """
    try:
        with open(file_path, 'r', encoding='utf-8', errors='ignore') as f:
            lines = []
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                lines.append(line)
    except OSError as e:
        raise ResourceError(file_path, e.strerror or str(e)) from e
    logger.debug(f"Loaded {len(lines)} entries from {file_path}")
    return lines


def load_wordlist(file_path: str) -> List[str]:
    """Loads the substitution words."""
    return read_lines(file_path)


def load_extensions(file_path: str) -> List[str]:
    """
    Loads extension templates. Every template must contain the '%' marker,
    entries without it are skipped.
    """
    extensions = []
    for line in read_lines(file_path):
        if EXTENSION_MARKER not in line:
            logger.warning(f"Skipping extension '{line}' from {file_path}: missing '{EXTENSION_MARKER}' marker")
            continue
        extensions.append(line)
    return extensions


def load_user_agents(file_path: Optional[str]) -> List[str]:
    """Loads the User-Agent pool. No file means an empty pool."""
    if not file_path:
        return []
    return read_lines(file_path)


def expand_words(words: Iterable[str], extensions: Optional[Iterable[str]] = None,
                 subdomain_host: Optional[str] = None) -> List[str]:
    """
    Expands the wordlist with extension templates and an optional subdomain
    suffix.

    Expansion is word-major: ['admin', 'login'] x ['%.php', '%.bak'] gives
    admin.php, admin.bak, login.php, login.bak.

    Args:
        words (Iterable[str]): Base words.
        extensions (Iterable[str], optional): Templates containing '%'.
        subdomain_host (str, optional): When set, each result becomes
                                        '<word>.<subdomain_host>'.

    Returns:
        List[str]: The expanded words.
    """
    extensions = list(extensions or [])
    expanded = []
    for word in words:
        variants = [ext.replace(EXTENSION_MARKER, word) for ext in extensions] if extensions else [word]
        for variant in variants:
            if subdomain_host:
                variant = f"{variant}.{subdomain_host}"
            expanded.append(variant)
    return expanded


def parse_header(raw: str) -> Tuple[str, str]:
    """
    Splits a single 'Key: Value' string.

    Returns:
        Tuple[str, str]: Lowercased key and trimmed value.

    Raises:
        HeaderParseError: If the string does not split into exactly two parts
                          on ':', the key is empty, or either side is not ASCII.
    """
    parts = raw.split(":")
    if len(parts) != 2:
        raise HeaderParseError(raw)
    key, value = parts[0].strip().lower(), parts[1].strip()
    if not key:
        raise HeaderParseError(raw)
    # httpx refuses non-ASCII header text when the client is built
    try:
        key.encode("ascii")
        value.encode("ascii")
    except UnicodeEncodeError as e:
        raise HeaderParseError(raw) from e
    return key, value


def parse_headers(raw_headers: Optional[Iterable[str]]) -> Dict[str, str]:
    """
    Parses custom headers given on the command line. Malformed entries are
    skipped with a warning and the first occurrence of a key wins.
    """
    headers: Dict[str, str] = {}
    for raw in raw_headers or []:
        try:
            key, value = parse_header(raw)
        except HeaderParseError as e:
            logger.warning(f"{e}; skipping it.")
            continue
        if key in headers:
            logger.debug(f"Ignoring duplicate header '{key}'")
            continue
        headers[key] = value
    return headers
