"""
Banner rendering for the feedback overlay.

The core only talks to the BannerRenderer protocol; the Arcade renderer is
available when arcade can be imported.
"""
from .banner import ArcadeBannerRenderer, BannerRenderer, BannerStyle

__all__ = ["ArcadeBannerRenderer", "BannerRenderer", "BannerStyle"]
