"""
Timeline simulation of a household's finances as dated life events
layered over an income/expense/asset/liability baseline.
"""
