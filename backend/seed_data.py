#!/usr/bin/env python3
"""Seed script to populate the JSON data directory with sample content."""

import os
import sys
from typing import Optional

from zeo_api.core.config import settings
from zeo_api.core.json_store import JsonStore, StorageError
from zeo_api.services.relations import update_destination_relationships


def create_sample_data(data_dir: Optional[str] = None) -> JsonStore:
    """Write sample destinations, tours and site content into ``data_dir``.

    Existing files are replaced. Returns the loaded store.
    """
    data_dir = data_dir or settings.data_dir
    os.makedirs(data_dir, exist_ok=True)

    store = JsonStore()
    store.load(data_dir)
    for collection in store.collections.values():
        collection.items = []

    # Destinations
    nepal = store["destinations"].insert({
        "name": "Nepal", "title": "Nepal", "slug": "nepal", "country": "Nepal",
        "region": "Himalayas", "type": "nepal", "featured": True, "listed": True,
        "description": "Home of eight of the ten highest peaks on earth.",
        "relatedTours": []
    })
    tibet = store["destinations"].insert({
        "name": "Tibet", "title": "Tibet", "slug": "tibet", "country": "China",
        "region": "Tibetan Plateau", "type": "international", "featured": True, "listed": True,
        "description": "High plateau monasteries and the sacred Mount Kailash.",
        "relatedTours": []
    })
    store["destinations"].insert({
        "name": "Bhutan", "title": "Bhutan", "slug": "bhutan", "country": "Bhutan",
        "region": "Eastern Himalayas", "type": "international", "featured": False, "listed": False,
        "description": "The last Himalayan kingdom.",
        "relatedTours": []
    })

    # Activities
    store["activities"].insert({
        "name": "Trekking", "slug": "trekking", "type": "adventure", "featured": True,
        "description": "Multi-day walks through mountain villages."
    })
    store["activities"].insert({
        "name": "Pilgrimage", "slug": "pilgrimage", "type": "spiritual", "featured": True,
        "description": "Journeys to sacred lakes and mountains."
    })

    # Tours
    tours = [
        {
            "title": "Everest Base Camp Trek", "slug": "everest-base-camp-trek",
            "category": "Trekking", "destination": "Nepal", "location": "Khumbu",
            "duration": "14 days", "price": 1450, "featured": True, "listed": True,
            "difficulty": "Challenging", "rating": 4.8,
            "description": "Classic trek to the foot of the world's highest mountain.",
            "highlights": ["Namche Bazaar", "Kala Patthar sunrise"],
            "activities": ["Trekking"],
            "primary_destination_id": nepal["id"], "secondary_destination_ids": []
        },
        {
            "title": "Kailash Mansarovar Yatra", "slug": "kailash-mansarovar-yatra",
            "category": "Pilgrimage", "destination": "Tibet", "location": "Ngari",
            "duration": "12 days", "price": 2850, "featured": True, "listed": True,
            "difficulty": "Moderate", "rating": 4.9,
            "description": "Sacred circuit around Mount Kailash and Lake Mansarovar.",
            "highlights": ["Kailash kora", "Lake Mansarovar"],
            "activities": ["Pilgrimage", "Trekking"],
            "primary_destination_id": tibet["id"], "secondary_destination_ids": [nepal["id"]]
        },
        {
            "title": "Kathmandu Valley Tour", "slug": "kathmandu-valley-tour",
            "category": "Cultural", "destination": "Nepal", "location": "Kathmandu",
            "duration": "3 days", "price": 320, "featured": False, "listed": True,
            "difficulty": "Easy", "rating": 4.5,
            "description": "Durbar squares, stupas and temples of the valley.",
            "highlights": ["Boudhanath", "Patan Durbar Square"],
            "activities": [],
            "primary_destination_id": nepal["id"], "secondary_destination_ids": []
        },
    ]
    for tour_data in tours:
        tour = store["tours"].insert(tour_data)
        update_destination_relationships(
            store, tour["id"], tour["primary_destination_id"], tour["secondary_destination_ids"]
        )

    # Testimonials
    store["testimonials"].insert({
        "name": "Priya Sharma", "email": "priya@example.com", "country": "India",
        "tour": "Kailash Mansarovar Yatra", "rating": 5, "title": "Life changing",
        "message": "Every detail of the yatra was taken care of.",
        "is_approved": True, "is_featured": True
    })
    store["testimonials"].insert({
        "name": "Tom Becker", "email": "tom@example.com", "country": "Germany",
        "tour": "Everest Base Camp Trek", "rating": 4, "title": "Great guides",
        "message": "Tough trek, excellent support.",
        "is_approved": False, "is_featured": False
    })

    # Blog, sliders, team
    store["posts"].insert({
        "title": "Preparing for high altitude", "slug": "preparing-for-high-altitude",
        "excerpt": "How to acclimatize safely.", "content": "Go slow, drink water, sleep low.",
        "category": "Travel Tips", "author": "Zeo Team", "date": "2024-03-01",
        "featured": True, "readTime": "5 min read"
    })
    store["sliders"].insert({
        "title": "Experience Nepal", "subtitle": "Immerse yourself in the Himalayas",
        "location": "Nepal Himalayas", "order_index": 1, "is_active": True,
        "image": "https://images.unsplash.com/photo-1544735716-392fe2489ffa?q=80&w=1920"
    })
    store["team"].insert({
        "name": "Ram Thapa", "role": "Managing Director", "order_index": 1, "is_active": True,
        "bio": "Twenty years leading treks across Nepal and Tibet.", "social": {}
    })

    # Enquiries
    store["enquiries"].insert({
        "name": "Anna Lee", "email": "anna@example.com", "phone": "",
        "destination": "kailash", "tour_title": "Kailash Mansarovar Yatra",
        "travelers": "2", "date": "2024-08-10", "message": "Is there a group departure in August?",
        "assigned_to": None, "notes": ""
    })

    # Trip planning requests
    store["trip_plans"].insert({
        "name": "Marco Rossi", "email": "marco@example.com", "phone": "",
        "destinations": ["Tibet"], "activities": ["Pilgrimage"],
        "duration": "2 weeks", "budget": "3000", "difficulty": "Moderate", "groupSize": "4",
        "travelDates": "September 2024", "specialRequirements": "", "message": "Family trip",
        "status": "pending"
    })

    # Gallery
    store["gallery"].insert({
        "title": "Mount Kailash north face", "alt": "Mount Kailash north face",
        "image": "https://images.unsplash.com/photo-1626014303757-6366ef55c4ff?q=80&w=1200",
        "gridSpan": "col-span-2 row-span-2", "order": 1, "isActive": True
    }, save=False)

    for collection in store.collections.values():
        collection.save()
    store.touch_gallery()

    store.save_contact({
        "company": {"name": "Zeo Tourism", "tagline": "Himalayan journeys since 2005"},
        "contact": {
            "email": {"primary": "info@zeotourism.com", "support": "support@zeotourism.com"},
            "phone": {"primary": "+977-1-4000000"},
            "address": {"city": "Kathmandu", "country": "Nepal"}
        },
        "social": {"facebook": "", "instagram": ""}
    })

    return store


if __name__ == "__main__":
    try:
        seeded = create_sample_data(sys.argv[1] if len(sys.argv) > 1 else None)
    except StorageError as e:
        print(f"Error creating sample data: {e}")
        sys.exit(1)

    print("Sample data created successfully!")
    print(f"Data directory: {seeded.data_dir}")
    for name, count in seeded.counts().items():
        print(f"Created {count} {name}")
