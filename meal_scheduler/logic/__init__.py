"""Core business logic layer.

Subpackages:
- filtering: allergy and dietary-plan constraints on the catalog
- scheduling: rating pools, premium quota, goal ranking, day and schedule assembly
- delivery: flat assignment rows and slot swaps on stored schedules
- reporting: nutrition totals
"""
__all__ = ["filtering", "scheduling", "delivery", "reporting"]
