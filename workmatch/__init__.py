"""WorkMatch: rule-based matching of domestic workers and job postings."""

__version__ = "0.1.0"
