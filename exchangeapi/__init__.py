"""
Package marker for the exchange API extension code under `exchangeapi`.
It groups the marker declarations, the routing and test-selection consumers, and the reference API.
Most functionality lives in the sibling packages; this file intentionally stays lightweight.
"""
