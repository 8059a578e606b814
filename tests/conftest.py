"""
Shared fixtures: small CSV exports written to a temporary directory.
"""

import pytest

from secmetrics.core.config import DataConfig

EDR_CSV = """\
Severity,IOCType,AlertType,Status,Hostname
Critical,IP,Network Connection,Open,WS-01
High,None,Network Connection,Closed,WS-02

Low,,Malware,Open,ws-01
Critical,Hash,Malware,Investigating,WS-01
"""

VULNERABILITIES_CSV = """\
AssetID,Severity,Status,DetectionSource,DetectionDate,PatchAppliedDate,IsCritical,IsPatchable,RecommendedTimeframe
101,Critical,Resolved,Nessus,2025-01-01,2025-01-03,Oui,Non,7
102,High,Resolved,Qualys,2025-01-01,2025-01-05,Non,Oui,
101,Low,Open,Nessus,2025-01-02,,Non,Oui,30
103,Medium,Resolved,Nessus,2025-01-01,2025-01-11,Oui,Oui,5
"""


@pytest.fixture(autouse=True)
def reset_config(monkeypatch):
    monkeypatch.setattr("secmetrics.core.config._config", None)


@pytest.fixture
def edr_csv(tmp_path):
    path = tmp_path / "edr_data.csv"
    path.write_text(EDR_CSV)
    return path


@pytest.fixture
def vulnerabilities_csv(tmp_path):
    path = tmp_path / "vulnerabilities_data.csv"
    path.write_text(VULNERABILITIES_CSV)
    return path


@pytest.fixture
def data_config(edr_csv, vulnerabilities_csv):
    return DataConfig(edr_path=str(edr_csv), vulnerabilities_path=str(vulnerabilities_csv))
