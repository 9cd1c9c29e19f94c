"""
Shared fixtures for the compositelab test suite.

Provides a small catalog (two fibers, one matrix) as decoded JSON documents and
an in-memory fetcher that records every location it is asked for.
"""

import asyncio
import copy

import pytest

INDEX_LOCATION = "materials/materials-index.json"
T300_LOCATION = "materials/fibers/t300.json"
IM7_LOCATION = "materials/fibers/im7.json"
EPOXY_LOCATION = "materials/matrices/3501-6.json"

SAMPLE_MANIFEST = {
    "materials": {
        "fibers": [
            {"id": "T300", "file": T300_LOCATION},
            {"id": "IM7", "file": IM7_LOCATION},
        ],
        "matrices": [
            {"id": "3501-6", "file": EPOXY_LOCATION},
        ],
    }
}

SAMPLE_T300 = {
    "id": "T300",
    "name": "T300 Carbon Fiber",
    "type": "Fiber",
    "mechanical": {
        "tensile_modulus": {"label": "Tensile Modulus", "value": 230, "unit": "GPa"},
    },
}

SAMPLE_IM7 = {
    "id": "IM7",
    "name": "IM7 Carbon Fiber",
    "type": "Fiber",
    "manufacturer": "Hexcel",
    "description": "Intermediate modulus carbon fiber.",
    "detailed_description": "IM7 is a **continuous** fiber.\n\nUsed in <aerospace> primary structures.",
    "mechanical": {
        "tensile_strength": {"label": "Tensile Strength", "value": 5.67, "unit": "GPa"},
        "tensile_modulus": {"label": "Tensile Modulus", "value": 276.0, "unit": "GPa", "display_value": ""},
        "density": {"label": "Density", "value": 1.78, "unit": "g/cm³", "display_value": "1.78 g/cm³ (typ.)"},
    },
    "thermal": {
        "cte_axial": {"label": "CTE (axial)", "value": -0.64, "unit": "µm/m·°C"},
    },
    "abaqus": {"template": "*MATERIAL, NAME=IM7\n*ELASTIC, TYPE=ENGINEERING CONSTANTS\n276000., 15500."},
    "references": ["Hexcel IM7 datasheet", "MIL-HDBK-17"],
}

SAMPLE_EPOXY = {
    "id": "3501-6",
    "name": "Hercules 3501-6 Epoxy",
    "type": "Matrix",
    "description": "Amine-cured epoxy resin.",
    "mechanical": {
        "tensile_modulus": {"label": "Tensile Modulus", "value": 4.3, "unit": "GPa"},
    },
    "thermal": {
        "tg": {"label": "Glass Transition", "value": 200, "unit": "°C"},
    },
    "cure_kinetics": {
        "activation_energy": {"label": "Activation Energy", "value": 72.6, "unit": "kJ/mol"},
    },
    "processing": {
        "cure_temp": {"label": "Cure Temperature", "value": 177, "unit": "°C"},
    },
    "rheological": {
        "min_viscosity": {"label": "Minimum Viscosity", "value": 0.5, "unit": "Pa·s"},
    },
    "references": [],
    "notes": "Store below -18 °C.",
    "shelf_life_days": 365,
}


class FakeFetcher:
    """
    In-memory stand-in for a static-file fetcher.

    Parameters
    ----------
    documents : dict[str, object]
        Location -> decoded JSON document.
    delays : dict[str, float], optional
        Per-location sleep before answering, to control completion order.
    """

    def __init__(self, documents: dict, delays: dict | None = None) -> None:
        self.documents = dict(documents)
        self.delays = dict(delays or {})
        self.calls: list[str] = []

    async def fetch_json(self, location: str):
        self.calls.append(location)
        # always yield so concurrent callers genuinely overlap
        await asyncio.sleep(self.delays.get(location, 0))
        if location not in self.documents:
            raise FileNotFoundError(f"No file at '{location}'")
        document = self.documents[location]
        if isinstance(document, Exception):
            raise document
        return copy.deepcopy(document)

    def count(self, location: str) -> int:
        return self.calls.count(location)


@pytest.fixture
def catalog_documents():
    """
    Decoded documents of the sample catalog keyed by location.

    Returns
    -------
    dict[str, dict]
        Manifest plus the three material records.
    """
    return {
        INDEX_LOCATION: copy.deepcopy(SAMPLE_MANIFEST),
        T300_LOCATION: copy.deepcopy(SAMPLE_T300),
        IM7_LOCATION: copy.deepcopy(SAMPLE_IM7),
        EPOXY_LOCATION: copy.deepcopy(SAMPLE_EPOXY),
    }


@pytest.fixture
def fetcher(catalog_documents):
    """FakeFetcher serving the sample catalog."""
    return FakeFetcher(catalog_documents)
