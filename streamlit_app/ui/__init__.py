"""
UI Styling and Components Module.

Global CSS, layout primitives and feedback helpers shared by the pages of the
Meal Planner Storefront.
"""
