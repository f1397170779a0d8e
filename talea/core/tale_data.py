"""Bundled demo tales used when no other catalog is supplied."""

from __future__ import annotations

from typing import Dict, List

_TALES: List[Dict[str, object]] = [
    {
        "id": "dummy-video-1",
        "type": "video",
        "title": "Hidden Gems of Kyoto: Traditional Tea Ceremony Experience",
        "description": "Discover the ancient art of Japanese tea ceremony in a 400-year-old temple. "
        "Learn the intricate rituals and philosophy behind this cultural treasure.",
        "imageUrl": "https://picsum.photos/seed/kyoto-tea/400/600",
        "location": "Kyoto, Japan",
        "rating": 4.8,
        "price": 50,
        "priceRange": "$50",
        "tags": ["cultural", "traditional", "japan", "tea-ceremony"],
        "category": "Cultural Experience",
        "featured": True,
        "personalityType": "The Cultural Weaver",
    },
    {
        "id": "dummy-video-2",
        "type": "video",
        "title": "StreetFood Tour: Bangkok Night Market Adventure",
        "description": "Join us on a culinary journey through Bangkok's most vibrant night markets. "
        "Taste authentic Thai street food and meet local vendors.",
        "imageUrl": "https://picsum.photos/seed/bangkok-food/400/500",
        "location": "Bangkok, Thailand",
        "rating": 4.6,
        "price": 30,
        "priceRange": "$30",
        "tags": ["food", "street-food", "thailand", "night-market"],
        "category": "Food & Dining",
        "personalityType": "The Culinary Explorer",
    },
    {
        "id": "dummy-video-3",
        "type": "video",
        "title": "Santorini Sunset: Photography Workshop",
        "description": "Capture the magical golden hour in Santorini with professional photography guidance. "
        "Learn composition techniques while exploring the island.",
        "imageUrl": "https://picsum.photos/seed/santorini-sunset/400/700",
        "location": "Santorini, Greece",
        "rating": 4.9,
        "price": 120,
        "priceRange": "$120",
        "tags": ["photography", "sunset", "greece", "workshop"],
        "category": "Photography Workshop",
        "personalityType": "The Serenity Seeker",
    },
    {
        "id": "dummy-hotel-1",
        "type": "hotel",
        "title": "Aman Tokyo - Luxury Urban Retreat",
        "description": "Experience unparalleled luxury in the heart of Tokyo with stunning city views, "
        "world-class amenities, and traditional Japanese hospitality.",
        "imageUrl": "https://picsum.photos/seed/aman-tokyo/400/600",
        "location": "Tokyo, Japan",
        "rating": 4.9,
        "price": 1200,
        "priceRange": "$$$$",
        "starRating": 5,
        "tags": ["luxury", "urban", "japan", "wellness"],
        "category": "Luxury Resort",
        "featured": True,
        "personalityType": "The Urban Storyteller",
        "amenities": ["Spa", "Rooftop Pool", "Fine Dining", "Concierge Service", "City Views"],
    },
    {
        "id": "dummy-hotel-2",
        "type": "hotel",
        "title": "Treehouse Lodge - Eco Adventure",
        "description": "Stay in sustainable treehouse accommodations surrounded by nature, "
        "perfect for adventure seekers and eco-conscious travelers.",
        "imageUrl": "https://picsum.photos/seed/treehouse-lodge/400/500",
        "location": "Costa Rica",
        "rating": 4.7,
        "price": 240,
        "priceRange": "$$",
        "starRating": 4,
        "tags": ["eco-friendly", "adventure", "nature", "sustainable"],
        "category": "Unique Accommodation",
        "personalityType": "The Wild Heart",
        "amenities": ["Guided Tours", "Organic Restaurant", "Hiking Trails", "Wildlife Viewing"],
    },
    {
        "id": "dummy-hotel-3",
        "type": "hotel",
        "title": "Riad Al Ksar - Traditional Moroccan",
        "description": "A restored riad in the Marrakech medina with a tiled courtyard, "
        "plunge pool and rooftop terrace overlooking the old town.",
        "imageUrl": "https://picsum.photos/seed/riad-al-ksar/400/650",
        "location": "Marrakech, Morocco",
        "rating": 4.6,
        "price": 180,
        "priceRange": "$$",
        "starRating": 4,
        "tags": ["historic", "morocco", "courtyard", "medina"],
        "category": "Historic Hotel",
        "personalityType": "The Cultural Weaver",
        "amenities": ["Hammam", "Rooftop Terrace", "Plunge Pool"],
    },
    {
        "id": "dummy-event-1",
        "type": "event",
        "title": "Holi Festival of Colours in Jaipur",
        "description": "Celebrate the arrival of spring with locals in the Pink City, "
        "throwing coloured powder to music and street food.",
        "imageUrl": "https://picsum.photos/seed/jaipur-holi/400/600",
        "location": "Jaipur, India",
        "rating": 4.7,
        "price": 40,
        "priceRange": "$",
        "date": "2025-03-14",
        "tags": ["festival", "india", "colour", "spring"],
        "category": "Cultural Festival",
        "personalityType": "The Adventurer's Call",
    },
    {
        "id": "dummy-event-2",
        "type": "event",
        "title": "Northern Lights Photography Night",
        "description": "Chase the aurora with a local photographer outside Tromso "
        "and learn long-exposure techniques under the arctic sky.",
        "imageUrl": "https://picsum.photos/seed/tromso-aurora/400/700",
        "location": "Tromso, Norway",
        "rating": 4.8,
        "price": 160,
        "priceRange": "$$$",
        "date": "2025-01-20",
        "tags": ["aurora", "photography", "norway", "night"],
        "category": "Photography Workshop",
        "personalityType": "The Wild Heart",
    },
    {
        "id": "dummy-restaurant-1",
        "type": "restaurant",
        "title": "Farm-to-Table Dinner in Tuscany",
        "description": "A seasonal tasting menu served in a vineyard farmhouse, "
        "with produce picked from the estate the same afternoon.",
        "imageUrl": "https://picsum.photos/seed/tuscany-dinner/400/550",
        "location": "Chianti, Italy",
        "rating": 4.9,
        "price": 95,
        "priceRange": "$$$",
        "cuisine": ["Italian", "Tuscan"],
        "tags": ["farm-to-table", "wine", "italy", "seasonal"],
        "category": "Sustainable Dining",
        "personalityType": "The Culinary Explorer",
    },
    {
        "id": "dummy-restaurant-2",
        "type": "restaurant",
        "title": "Tapas Crawl Through the Gothic Quarter",
        "description": "Hop between family-run tapas bars in Barcelona's old town "
        "and taste the classics with a local food writer.",
        "imageUrl": "https://picsum.photos/seed/barcelona-tapas/400/500",
        "location": "Barcelona, Spain",
        "rating": 4.5,
        "price": 65,
        "priceRange": "$$",
        "cuisine": ["Spanish", "Catalan"],
        "tags": ["tapas", "spain", "food-tour"],
        "category": "Food & Dining",
        "personalityType": "The Culinary Explorer",
    },
    {
        "id": "dummy-attraction-1",
        "type": "attraction",
        "title": "Secret Hot Springs in Icelandic Highlands",
        "description": "Discover hidden geothermal pools in the remote Icelandic highlands. "
        "Soak in natural hot springs surrounded by volcanic landscapes.",
        "imageUrl": "https://picsum.photos/seed/icelandic-hot-springs/400/700",
        "location": "Icelandic Highlands, Iceland",
        "rating": 4.9,
        "price": 20,
        "priceRange": "$",
        "duration": "6 hours",
        "tags": ["hot-springs", "geothermal", "iceland", "nature"],
        "category": "Natural Wonder",
        "personalityType": "The Serenity Seeker",
    },
    {
        "id": "dummy-attraction-2",
        "type": "attraction",
        "title": "Ancient Petra by Candlelight",
        "description": "Explore the ancient city of Petra illuminated by thousands of candles. "
        "Experience the magic of this UNESCO World Heritage site at night.",
        "imageUrl": "https://picsum.photos/seed/petra-candlelight/400/600",
        "location": "Petra, Jordan",
        "rating": 4.8,
        "price": 75,
        "priceRange": "$$$",
        "duration": "3 hours",
        "tags": ["ancient-ruins", "unesco", "jordan", "night-tour"],
        "category": "Historical Site",
        "personalityType": "The Cultural Weaver",
    },
]


def demo_tales() -> List[Dict[str, object]]:
    """Return fresh copies of the bundled tale payloads."""

    return [dict(tale) for tale in _TALES]


__all__ = ["demo_tales"]
