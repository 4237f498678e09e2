"""Load expressions from a text file or an archive containing one."""
import lzma
from pathlib import Path
import tarfile
import tempfile
from typing import Callable, Dict, Iterable, List
import zipfile

import py7zr
from py7zr.exceptions import Bad7zFile

from arithmetic_evaluator.common.logger import logger


COMMENT_PREFIX = "#"


def split_expressions(content: str) -> List[str]:
    """
    Split file content into expression lines.

    Blank lines and lines starting with ``#`` are dropped, the remaining
    lines are stripped.

    :param str content: Raw file content

    :return: Expressions in file order
    :rtype: List[str]
    """
    lines = (line.strip() for line in content.splitlines())
    return [line for line in lines if line and not line.startswith(COMMENT_PREFIX)]


def read_text(input_file: Path) -> str:
    """
    Return the text of a plain ``.txt`` file or of the first ``.txt`` member of an archive.

    :param Path input_file: Path to the text file or archive

    :return: File content
    :rtype: str
    :raises ValueError: If the file cannot be decoded, the format is unsupported or the archive is unreadable
    """
    if input_file.suffix == ".txt":
        return input_file.read_text(encoding="utf-8")
    return extract_archive(input_file)


def _first_text_member(names: Iterable[str], archive_path: Path) -> str:
    for name in names:
        if name.endswith(".txt"):
            return name
    raise ValueError(f"📄❌ {archive_path.name} holds no .txt member")


def _read_zip(archive_path: Path) -> str:
    with zipfile.ZipFile(archive_path, "r") as zf:
        member = _first_text_member(zf.namelist(), archive_path)
        return zf.read(member).decode("utf-8")


def _read_tar_xz(archive_path: Path) -> str:
    with tarfile.open(archive_path, "r:xz") as tf:
        files = {m.name: m for m in tf.getmembers() if m.isfile()}
        member = _first_text_member(files, archive_path)
        return tf.extractfile(files[member]).read().decode("utf-8")


def _read_7z(archive_path: Path) -> str:
    with py7zr.SevenZipFile(archive_path, mode="r") as archive:
        member = _first_text_member(archive.getnames(), archive_path)
        # py7zr only extracts to disk
        with tempfile.TemporaryDirectory() as tmpdir:
            archive.extract(path=tmpdir, targets=[member])
            return (Path(tmpdir) / member).read_text(encoding="utf-8")


ARCHIVE_READERS: Dict[str, Callable[[Path], str]] = {
    ".zip": _read_zip,
    ".tar.xz": _read_tar_xz,
    ".7z": _read_7z,
}

# Raised by the archive libraries on damaged or truncated input
ARCHIVE_ERRORS = (zipfile.BadZipFile, tarfile.TarError, Bad7zFile, lzma.LZMAError, EOFError)


def extract_archive(archive_path: Path) -> str:
    """
    Return the content of the first ``.txt`` member of an expressions archive.

    The reader is chosen from the file extension (see :data:`ARCHIVE_READERS`).
    Damaged archives are reported as ``ValueError``, like unsupported formats.

    :param Path archive_path: Path to a ``.zip``, ``.tar.xz`` or ``.7z`` file

    :return: Text of the expressions file
    :rtype: str
    :raises ValueError: If the format is unsupported, the archive is damaged or holds no .txt member
    """
    suffixes = "".join(archive_path.suffixes[-2:])
    reader = ARCHIVE_READERS.get(suffixes) or ARCHIVE_READERS.get(archive_path.suffix)
    if reader is None:
        raise ValueError(f"📄❌ Unsupported input format: {''.join(archive_path.suffixes) or archive_path.name}")

    logger.debug(f"📦 Reading {archive_path.name} with {reader.__name__}")
    try:
        return reader(archive_path)
    except ARCHIVE_ERRORS as exc:
        raise ValueError(f"📄❌ Cannot open archive {archive_path.name}: {exc}") from exc


def load_expressions(input_file: Path) -> List[str]:
    """
    Read the expressions stored in ``input_file``.

    :param Path input_file: Text file or archive

    :return: Non-empty, non-comment lines
    :rtype: List[str]
    :raises ValueError: If the file cannot be read as an expressions file
    """
    return split_expressions(read_text(input_file))
