"""
Framework-free domain logic: filter state, dataset, scales, chart geometry.
Nothing in here imports Dash.
"""
