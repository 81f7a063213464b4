"""
scoring/ — Stock Health Score Engine

Modules:
    utils.py                  - Rounding, clamping and month arithmetic
    evidence_decay.py         - Per-record raw points (tier/score, decay, review count)
    evidence_aggregator.py    - Evidence fold into capped pillar boosts
    distress_calculator.py    - Altman Z distress index
    quality_calculator.py     - Piotroski F quality index
    composite_calculator.py   - Growth / value / health / momentum composite
    ethics_gate.py            - Keyword ethics screen
    integration_service.py    - Full pipeline integration service
"""
