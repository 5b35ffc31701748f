# Path: spec_builder/process/__init__.py
"""
Process Layer for spec_builder

The PROCESS layer turns extracted tests into specification rows:
- matcher/ - Name normalization, similarity and candidate ranking
- resolution/ - Row assembly and the operator resolution workflow

All components follow the IPO pattern:
- Read from INPUT layer (extraction payloads, catalogue snapshot)
- Process data (ranking, auto-acceptance, queueing)
- Hand results to OUTPUT layer (record stores, product export)
"""

from spec_builder.process.matcher import MatchRanker, MatchSettings
from spec_builder.process.resolution import ResolutionWorkflow, SpecRowAssembler

__all__ = [
    'MatchRanker',
    'MatchSettings',
    'ResolutionWorkflow',
    'SpecRowAssembler',
]
