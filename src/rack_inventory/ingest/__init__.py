# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Spreadsheet ingestion: grid reading, section extraction, record assembly."""

from rack_inventory.ingest.assembler import RackAssembler, assemble, join_components
from rack_inventory.ingest.classifier import classify
from rack_inventory.ingest.extractor import ExtractedRackData, extract_rack_data
from rack_inventory.ingest.ports import build_port_details, parse_port_map
from rack_inventory.ingest.reader import (
    load_rack_file,
    parse_rack_bytes,
    parse_rack_file,
    read_grid,
)

__all__ = [
    "ExtractedRackData",
    "RackAssembler",
    "assemble",
    "build_port_details",
    "classify",
    "extract_rack_data",
    "join_components",
    "load_rack_file",
    "parse_port_map",
    "parse_rack_bytes",
    "parse_rack_file",
    "read_grid",
]
