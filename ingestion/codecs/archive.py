"""
Zip container codec: pull the tabular member out of an upload, package an export
"""

import io
import zipfile
import zlib
from typing import List, Optional
from core.config import settings
from core.exceptions import FormatError, NotFoundError, PayloadTooLargeError
import logging

logger = logging.getLogger(__name__)

# Fixed member timestamp so identical exports produce identical archives
_EXPORT_DATE_TIME = (1980, 1, 1, 0, 0, 0)


class ArchiveCodec:
    """
    Read and write single-level zip containers.

    Import side:
    - Only top-level members are considered (no "/" in the name)
    - The first member ending in the tabular suffix wins; others are ignored
    - The chosen member is refused if it expands past max_member_bytes

    Export side:
    - One DEFLATE member under a fixed conventional name
    """

    def __init__(
        self,
        member_suffix: Optional[str] = None,
        member_name: Optional[str] = None,
        max_member_bytes: Optional[int] = None
    ):
        self.member_suffix = (member_suffix or settings.ARCHIVE_MEMBER_SUFFIX).lower()
        self.member_name = member_name or settings.ARCHIVE_MEMBER_NAME
        self.max_member_bytes = max_member_bytes or settings.MAX_EXTRACTED_BYTES

    def extract(self, archive_bytes: bytes) -> bytes:
        """
        Return the bytes of the first qualifying tabular member.

        Raises:
            FormatError: The bytes are not a readable zip container
            NotFoundError: No top-level member has the tabular suffix
            PayloadTooLargeError: The member expands past max_member_bytes
        """
        try:
            archive = zipfile.ZipFile(io.BytesIO(archive_bytes))
        except (zipfile.BadZipFile, zlib.error, EOFError, ValueError) as e:
            raise FormatError(
                "container unreadable",
                context={"stage": "archive", "payload_bytes": len(archive_bytes)},
                original_exception=e
            )

        with archive:
            member = self._select_member(archive.infolist())
            if member is None:
                raise NotFoundError(
                    "no tabular member",
                    context={
                        "suffix": self.member_suffix,
                        "members": [info.filename for info in archive.infolist()]
                    }
                )

            # zipfile stops reading at file_size, so the declared size bounds the read
            if member.file_size > self.max_member_bytes:
                raise PayloadTooLargeError(
                    "tabular member too large",
                    context={
                        "member": member.filename,
                        "size_bytes": member.file_size,
                        "limit_bytes": self.max_member_bytes
                    }
                )

            try:
                data = archive.read(member)
            except (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError, RuntimeError) as e:
                # CRC mismatch, truncated data, unsupported compression or encryption
                raise FormatError(
                    "container unreadable",
                    context={"stage": "archive", "member": member.filename},
                    original_exception=e
                )

        logger.info(f"Extracted member {member.filename} ({len(data)} bytes)")
        return data

    def package(self, tabular_bytes: bytes) -> bytes:
        """Wrap tabular bytes in a new single-member zip container"""
        buffer = io.BytesIO()

        info = zipfile.ZipInfo(self.member_name, date_time=_EXPORT_DATE_TIME)
        info.compress_type = zipfile.ZIP_DEFLATED
        info.external_attr = 0o644 << 16

        with zipfile.ZipFile(buffer, "w") as archive:
            archive.writestr(info, tabular_bytes)

        archive_bytes = buffer.getvalue()
        logger.info(
            f"Packaged {len(tabular_bytes)} bytes as {self.member_name} "
            f"({len(archive_bytes)} bytes compressed)"
        )
        return archive_bytes

    def _select_member(self, members: List[zipfile.ZipInfo]) -> Optional[zipfile.ZipInfo]:
        for info in members:
            if info.is_dir() or "/" in info.filename or "\\" in info.filename:
                continue
            if info.filename.lower().endswith(self.member_suffix):
                return info
        return None
