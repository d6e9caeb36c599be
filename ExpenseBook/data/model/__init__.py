"""Qt table models for the ExpenseBook application.

This subpackage provides table models for the filtered expense listing
(ExpenseModel) and the per-category spending breakdown (CategoryModel).
"""
