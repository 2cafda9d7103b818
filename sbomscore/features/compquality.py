"""Component quality features backed by external threat intelligence.

These need data sources (EOL databases, malware feeds, KEV, NVD) that are not
part of the document, so they are always reported as not applicable. The
category they belong to is informational and never affects the overall score.
"""

from __future__ import annotations

from sbomscore.document import Document
from sbomscore.scoring.specs import FeatureScore

NO_DATA_SOURCE = "N/A (no external data source)"


def _not_available(doc: Document) -> FeatureScore:
    return FeatureScore(score=0.0, desc=NO_DATA_SOURCE, ignore=True)


comp_eol_eos = _not_available
comp_malicious = _not_available
comp_vuln_sev_critical = _not_available
comp_kev = _not_available
comp_purl_valid = _not_available
comp_cpe_valid = _not_available
