"""
Negotiation Service

Salary negotiation comparisons over the occupation catalog: target salary,
comparison range and insights for an occupation, location and experience tier.
"""

from .calculator import ExperienceLevel, SalaryNegotiationData, SalaryRange, get_salary_negotiation_data

__all__ = [
    'ExperienceLevel',
    'SalaryNegotiationData',
    'SalaryRange',
    'get_salary_negotiation_data',
]
