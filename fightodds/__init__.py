"""
Fight odds analytics.

Pure, synchronous analytics over bookmaker odds snapshots for a contest:
de-vigged probabilities, market consensus, line movement and steam moves,
sharp vs public divergence, arbitrage and value detection, and a fixed
feature vector for downstream prediction models.

Persistence, HTTP and live fan-out belong to the caller:
- models/: Snapshot and result schemas
- engine/: Analyzers and the feature assembler
- utils/: Logging setup
"""

__version__ = "0.1.0"
