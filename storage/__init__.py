from storage.base import CompanyRepository
from storage.memory import InMemoryCompanyRepository
from storage.seed import load_companies

__all__ = ["CompanyRepository", "InMemoryCompanyRepository", "load_companies"]
