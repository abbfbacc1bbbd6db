"""
Image list merging.

Images arrive either as bare URL strings or as records carrying `url` and/or
`urls.original`. Merges dedupe on that canonical URL.
"""

from typing import Any, Dict, List, Optional


def image_key(image: Any) -> Optional[str]:
    """
    Canonical identity of an image: urls.original, else url, else the string itself.

    Examples:
        >>> image_key({"urls": {"original": "a.jpg"}, "url": "a-thumb.jpg"})
        'a.jpg'
        >>> image_key("b.jpg")
        'b.jpg'
    """
    if isinstance(image, dict):
        urls = image.get("urls")
        if isinstance(urls, dict) and isinstance(urls.get("original"), str) and urls["original"]:
            return urls["original"]
        url = image.get("url")
        return url if isinstance(url, str) and url else None
    if isinstance(image, str):
        return image or None
    return None


def merge_image_lists(primary: List[Any], secondary: List[Any]) -> List[Any]:
    """
    Append unseen images from `secondary` to `primary`, preserving order.

    Images without a canonical URL are dropped from `secondary`; `primary` is
    kept as-is.
    """
    merged = list(primary)
    seen = {image_key(image) for image in primary} - {None}
    for image in secondary:
        key = image_key(image)
        if key is not None and key not in seen:
            merged.append(image)
            seen.add(key)
    return merged


def merge_cabin_images(trip: Dict[str, Any]) -> List[str]:
    """
    Move images.cabin into its canonical home, cruiseInfo.cabin.images.

    Returns:
        A warning when images were moved
    """
    images = trip.get("images")
    if not isinstance(images, dict) or not isinstance(images.get("cabin"), list):
        return []

    cruise_info = trip.get("cruiseInfo")
    if not isinstance(cruise_info, dict):
        cruise_info = trip["cruiseInfo"] = {}
    cabin = cruise_info.get("cabin")
    if not isinstance(cabin, dict):
        cabin = cruise_info["cabin"] = {}
    existing = cabin.get("images") if isinstance(cabin.get("images"), list) else []

    cabin["images"] = merge_image_lists(existing, images.pop("cabin"))
    if not images:
        del trip["images"]

    return ["Moved images.cabin to cruiseInfo.cabin.images (canonical location)"]
