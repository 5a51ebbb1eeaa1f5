"""In-memory candidate source."""

from typing import Optional

from ma_engine.models import UnifiedVar
from .base import CandidateSource


class StaticSource(CandidateSource):
    """Candidate source over a fixed list of VARs."""

    name = "static"

    def __init__(self, vars: Optional[list[UnifiedVar]] = None):
        self._vars = list(vars) if vars is not None else sample_vars()

    async def load(self) -> list[UnifiedVar]:
        """Return the configured VARs."""
        return list(self._vars)


def sample_vars() -> list[UnifiedVar]:
    """Sample VAR records used for demos and the default seed."""
    return [
        UnifiedVar(
            id=1,
            name="Carolina Cloud Partners",
            website="carolinacloud.example.com",
            hq_city="Raleigh",
            hq_state="NC",
            annual_revenue=180,
            ebitda_margin=14.5,
            growth_rate=18,
            employee_count=420,
            ownership_type="PE-Backed",
            glassdoor_rating=4.2,
            specialties=["Cloud", "Managed Services", "Cybersecurity"],
            top_vendors=["Microsoft", "Cisco", "Dell", "VMware"],
            customer_segment="Mid-Market",
            certifications=["Microsoft Solutions Partner", "Cisco Gold"],
            description="Cloud migration and managed services provider for mid-market firms.",
            data_sources=["Company website", "PE sponsor release"],
            confidence_score=0.8,
        ),
        UnifiedVar(
            id=2,
            name="Peachtree Network Systems",
            website="peachtreenet.example.com",
            hq_city="Atlanta",
            hq_state="GA",
            annual_revenue=240,
            ebitda_margin=11.0,
            growth_rate=9,
            employee_count=610,
            ownership_type="Private",
            specialties=["Networking", "Cybersecurity", "Collaboration"],
            top_vendors=["Cisco", "Palo Alto Networks", "HPE"],
            customer_segment="Enterprise",
            description="Network infrastructure integrator with a growing security practice.",
            confidence_score=0.7,
        ),
        UnifiedVar(
            id=3,
            name="Keystone Data Solutions",
            website="keystonedata.example.com",
            hq_city="Pittsburgh",
            hq_state="PA",
            annual_revenue=95,
            ebitda_margin=16.0,
            growth_rate=22,
            employee_count=210,
            ownership_type="Family-Owned",
            glassdoor_rating=4.5,
            specialties=["Data Analytics", "Cloud", "AI/ML"],
            top_vendors=["Microsoft", "AWS", "Snowflake"],
            customer_segment="Mixed",
            description="Analytics and cloud data platform consultancy.",
            confidence_score=0.6,
        ),
        UnifiedVar(
            id=4,
            name="Empire Integration Group",
            website="empireintegration.example.com",
            hq_city="Albany",
            hq_state="NY",
            annual_revenue=420,
            ebitda_margin=7.5,
            growth_rate=3,
            employee_count=1300,
            ownership_type="ESOP",
            specialties=["Data Center", "Managed Services"],
            top_vendors=["Dell", "NetApp", "VMware", "Lenovo"],
            customer_segment="Enterprise",
            description="Data center and hardware lifecycle reseller.",
            confidence_score=0.65,
        ),
        UnifiedVar(
            id=5,
            name="Pacific Secure IT",
            website="pacificsecure.example.com",
            hq_city="Portland",
            hq_state="OR",
            annual_revenue=60,
            ebitda_margin=None,
            growth_rate=None,
            employee_count=140,
            ownership_type="VC-Backed",
            specialties=["Cybersecurity"],
            top_vendors=["Fortinet", "CrowdStrike"],
            customer_segment="SMB",
            description="Managed security services for small businesses.",
            confidence_score=0.4,
        ),
        UnifiedVar(
            id=6,
            name="ePlus",
            website="eplus.com",
            hq_city="Herndon",
            hq_state="VA",
            annual_revenue=2100,
            ebitda_margin=6.5,
            growth_rate=4,
            employee_count=1900,
            ownership_type="Public",
            strategic_specialty="Security & Cloud",
            specialties=["Cybersecurity", "Cloud", "Managed Services"],
            top_vendors=["Cisco", "Palo Alto Networks", "Dell", "HPE", "Nutanix", "NetApp"],
            customer_segment="Mid-Market",
            description="Security-first IT, cloud consulting, managed services.",
            confidence_score=0.9,
        ),
    ]
