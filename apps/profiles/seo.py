"""
SEO metadata for public profile pages.

Builds the page title, meta description/keywords, Open Graph and Twitter
card tags, and a schema.org ``Person`` JSON-LD block so the frontend can
render them into the document head.
"""

from django.conf import settings

from .emails import profile_url


def _photo_url(profile, request=None):
    if not profile.profile_photo:
        return None
    url = profile.profile_photo.url
    return request.build_absolute_uri(url) if request is not None else url


def _experience_phrase(profile):
    return profile.experience.strip() or "professional"


def build_profile_seo(profile, request=None):
    site = getattr(settings, "SITE_NAME", "Show Yourself")
    url = profile_url(profile)
    image = _photo_url(profile, request)

    description = (
        f"Professional profile of {profile.name}, {profile.profession} "
        f"with {_experience_phrase(profile)} experience."
    )
    if profile.address:
        description += f" Based in {profile.address}."

    og_title = f"{profile.name} - {profile.profession}"
    og_description = (
        f"Professional {profile.profession} with {_experience_phrase(profile)} experience"
    )
    keywords = [profile.name, profile.profession, *profile.skills_list, "professional profile"]

    person = {
        "@context": "https://schema.org",
        "@type": "Person",
        "name": profile.name,
        "jobTitle": profile.profession,
        "email": profile.email,
        "telephone": profile.phone or None,
        "address": profile.address or None,
        "description": og_description,
        "url": url,
        "image": image,
    }

    return {
        "title": f"{og_title} | {site}",
        "description": description,
        "keywords": ", ".join(keywords),
        "canonical_url": url,
        "open_graph": {
            "title": og_title,
            "description": og_description,
            "type": "profile",
            "url": url,
            "image": image,
        },
        "twitter": {
            "card": "summary_large_image" if image else "summary",
            "title": og_title,
            "description": og_description,
            "image": image,
        },
        "json_ld": {k: v for k, v in person.items() if v is not None},
    }
