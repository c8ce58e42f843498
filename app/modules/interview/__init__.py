from .models import CompanyQuestion

__all__ = ["CompanyQuestion"]
