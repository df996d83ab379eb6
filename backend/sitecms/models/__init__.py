from .admin import Admin
from .audit_log import AuditLog
from .about import About
from .blog import Blog
from .contact import Contact
from .faq import FAQ
from .homepage import Homepage
from .project import Project
from .quote import Quote
from .service import Service
from .testimonial import Testimonial
from .trusted_by import TrustedBy

__all__ = [
    "Admin",
    "AuditLog",
    "About",
    "Blog",
    "Contact",
    "FAQ",
    "Homepage",
    "Project",
    "Quote",
    "Service",
    "Testimonial",
    "TrustedBy",
]
