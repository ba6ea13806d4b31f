"""
license_core/metadata.py

External metadata applied to license records before they are validated and
written. Currently this is the FSF "libre" flag.

FSF data is a JSON document in the shape published by the FSF license API::

    {"licenses": {"Expat": {"identifiers": {"spdx": ["MIT"]}, "tags": ["libre", "gpl-3-compatible"]}}}

The source may be a local file or an http(s) URL.
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Any

import requests

from license_core.model import License
from license_core.network_utils import fetch_json
from license_core.utils.io import read_json

logger = logging.getLogger(__name__)

LIBRE_TAG = "libre"


class FsfLicenseData:
    def __init__(self, libre_ids: set[str] | None = None, *, known_ids: set[str] | None = None):
        self.libre_ids = set(libre_ids or ())
        self.known_ids = set(known_ids or ()) | self.libre_ids
        self.loaded = libre_ids is not None or known_ids is not None

    @classmethod
    def from_document(cls, document: Any) -> FsfLicenseData:
        libre: set[str] = set()
        known: set[str] = set()
        licenses = document.get("licenses", {}) if isinstance(document, dict) else {}
        for entry in licenses.values():
            if not isinstance(entry, dict):
                continue
            spdx_ids = (entry.get("identifiers") or {}).get("spdx") or []
            tags = {str(tag).lower() for tag in entry.get("tags") or []}
            for spdx_id in spdx_ids:
                known.add(spdx_id)
                if LIBRE_TAG in tags:
                    libre.add(spdx_id)
        return cls(libre, known_ids=known)

    @classmethod
    def load(cls, source: str | Path | None) -> FsfLicenseData:
        """Load FSF data, or return an empty instance when unavailable.

        Load failures are logged and never abort the run; licenses then keep
        ``fsf_libre=None``.
        """
        if not source:
            return cls()
        source_str = str(source)
        try:
            if source_str.startswith(("http://", "https://")):
                document = fetch_json(source_str)
            else:
                document = read_json(Path(source_str))
        except (OSError, ValueError, requests.RequestException) as exc:
            logger.warning("Unable to load FSF license data from %s: %s", source_str, exc)
            return cls()
        data = cls.from_document(document)
        logger.info("Loaded FSF data for %d license ids", len(data.known_ids))
        return data

    def is_fsf_libre(self, license_id: str) -> bool | None:
        if not self.loaded:
            return None
        return license_id in self.libre_ids


class MetadataAugmenter:
    def __init__(self, fsf_data: FsfLicenseData | None = None) -> None:
        self.fsf_data = fsf_data or FsfLicenseData()

    def augment_license(self, license: License) -> License:
        return dataclasses.replace(license, fsf_libre=self.fsf_data.is_fsf_libre(license.license_id))
