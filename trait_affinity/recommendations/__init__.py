"""
Recommendation engine: scores candidate assets against a taste profile and
ranks them into a top-N list with per-trait explanations.

Modules
-------
scorer   : ScoringWeights + score_candidate() — pure, no I/O.
ranker   : rank_candidates() — stable score-descending top-N.
reporter : build_report_payload() + write_recommendation_json/csv() — file output.
"""
