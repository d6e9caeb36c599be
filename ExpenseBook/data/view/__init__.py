"""Qt views and delegates for the ExpenseBook application.

This subpackage provides the expense table (ExpenseView), the category
breakdown list (CategoryView) and the summary cards (SummaryWidget).
"""
