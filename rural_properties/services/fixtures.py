"""
Sample records inserted by the seeding utility.

Cross-record references use symbolic keys ("prop_001", agent emails,
user emails). The seeding service swaps them for the ids created earlier
in the same run.
"""

from decimal import Decimal

AGENCY = {
    "name": "Rural Properties Agency",
    "logo": "https://example.com/logo.png",
    "address": "123 Main St, Tzaneen",
    "phone": "+27 15 123 4567",
    "email": "info@ruralproperties.co.za",
}

JOHN_IMAGE = "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e?w=150&q=80"
SARAH_IMAGE = "https://images.unsplash.com/photo-1494790108755-2616b612b786?w=150&q=80"
MIKE_IMAGE = "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=150&q=80"

JOHN = "john@ruralproperties.co.za"
SARAH = "sarah@ruralproperties.co.za"
MIKE = "mike@ruralproperties.co.za"
REGULAR_USER = "user@example.com"


def _features(bedrooms, bathrooms, garages, parking, pool, garden, security, electricity, water, internet, phone):
    return {
        "bedrooms": bedrooms,
        "bathrooms": bathrooms,
        "garages": garages,
        "parking_spaces": parking,
        "swimming_pool": pool,
        "garden": garden,
        "security": security,
        "electricity": electricity,
        "water": water,
        "internet": internet,
        "phone_line": phone,
    }


PROPERTIES = [
    {
        "key": "prop_001",
        "agent_email": JOHN,
        "title": "Beautiful Farm with River Access",
        "description": (
            "Stunning 15-hectare farm with pristine river frontage. This property features fertile soil, "
            "excellent water rights, and a main house with 4 bedrooms. Perfect for agriculture, livestock, "
            "or development. The river provides year-round water supply and the property includes "
            "established irrigation systems."
        ),
        "address": "Farm 123, Rietfontein Road",
        "city": "Tzaneen",
        "province": "Limpopo",
        "postal_code": "0850",
        "latitude": -23.6524,
        "longitude": 30.1654,
        "price": Decimal("2450000"),
        "land_size": "15 hectares",
        "building_size": "450 sqm",
        "total_size": "15 hectares",
        "features": _features(4, 2, 2, 4, True, True, True, True, True, False, True),
        "property_type": "farm",
        "status": "active",
        "featured": True,
        "images": [
            "https://images.unsplash.com/photo-1500382017468-9049fed747ef?w=800&q=80",
            "https://images.unsplash.com/photo-1560448204-e02f11c3d0e2?w=800&q=80",
            "https://images.unsplash.com/photo-1570129477492-45c003edd2be7?w=800&q=80",
        ],
        "owner": {"name": "Property Owner", "email": "owner@example.com", "phone": "+27 82 987 6543"},
        "tags": ["river", "agriculture", "development", "water-rights"],
        "amenities": ["river-access", "irrigation", "borehole", "fencing", "workers-quarters"],
        "zoning": "agricultural",
        "water_rights": True,
        "electricity": True,
        "road_access": "paved",
    },
    {
        "key": "prop_002",
        "agent_email": SARAH,
        "title": "Modern Smallholding with Mountain Views",
        "description": (
            "Contemporary 8-hectare smallholding with breathtaking mountain views. This property features "
            "a modern 3-bedroom house, solar power system, and excellent soil quality. Ideal for organic "
            "farming, horse breeding, or luxury country living. Includes established orchards and "
            "vegetable gardens."
        ),
        "address": "Smallholding 45, Mountain View Road",
        "city": "Nelspruit",
        "province": "Mpumalanga",
        "postal_code": "1201",
        "latitude": -25.4733,
        "longitude": 30.9857,
        "price": Decimal("1850000"),
        "land_size": "8 hectares",
        "building_size": "320 sqm",
        "total_size": "8 hectares",
        "features": _features(3, 2, 2, 3, False, True, True, True, True, True, True),
        "property_type": "smallholding",
        "status": "active",
        "featured": True,
        "images": [
            "https://images.unsplash.com/photo-1560448204-e02f11c3d0e2?w=800&q=80",
            "https://images.unsplash.com/photo-1571063109413-5d5d5b8b2b5b?w=800&q=80",
            "https://images.unsplash.com/photo-1580587771525-78b9dba3b914?w=800&q=80",
        ],
        "owner": {"name": "Smallholding Owner", "email": "owner2@example.com", "phone": "+27 82 876 5432"},
        "tags": ["mountain", "modern", "organic", "solar"],
        "amenities": ["solar-power", "orchard", "vegetable-garden", "borehole", "fencing"],
        "zoning": "residential-agricultural",
        "water_rights": True,
        "electricity": True,
        "road_access": "gravel",
    },
    {
        "key": "prop_003",
        "agent_email": MIKE,
        "title": "Residential Plot in Developing Suburb",
        "description": (
            "Prime 1200sqm residential plot in fast-growing suburb with all municipal services available. "
            "This level plot is perfect for building your dream home. The area has excellent schools, "
            "shopping centers, and medical facilities nearby. Great investment opportunity."
        ),
        "address": "Plot 789, Thornhill Estate",
        "city": "Polokwane",
        "province": "Limpopo",
        "postal_code": "0699",
        "latitude": -23.9045,
        "longitude": 29.4689,
        "price": Decimal("450000"),
        "land_size": "1200 sqm",
        "building_size": None,
        "total_size": "1200 sqm",
        "features": _features(0, 0, 0, 0, False, False, False, False, False, False, False),
        "property_type": "plot",
        "status": "active",
        "featured": False,
        "images": [
            "https://images.unsplash.com/photo-1560448204-e02f11c3d0e2?w=800&q=80",
            "https://images.unsplash.com/photo-1580587771525-78b9dba3b914?w=800&q=80",
        ],
        "owner": None,
        "tags": ["residential", "investment", "development", "suburb"],
        "amenities": ["municipal-services", "fenced", "level-plot"],
        "zoning": "residential",
        "water_rights": False,
        "electricity": False,
        "road_access": "paved",
    },
    {
        "key": "prop_004",
        "agent_email": JOHN,
        "title": "Family House with Large Garden",
        "description": (
            "Charming 3-bedroom family house on 850sqm property with beautiful mature garden. This "
            "well-maintained home features modern kitchen, spacious living areas, and outdoor "
            "entertainment area. Located in quiet family-friendly neighborhood with good schools nearby."
        ),
        "address": "45 Oak Street, Middelburg",
        "city": "Middelburg",
        "province": "Mpumalanga",
        "postal_code": "1050",
        "latitude": -25.7709,
        "longitude": 29.4717,
        "price": Decimal("980000"),
        "land_size": "850 sqm",
        "building_size": "280 sqm",
        "total_size": "850 sqm",
        "features": _features(3, 2, 2, 2, False, True, True, True, True, True, True),
        "property_type": "house",
        "status": "active",
        "featured": True,
        "images": [
            "https://images.unsplash.com/photo-1570129477492-45c003edd2be7?w=800&q=80",
            "https://images.unsplash.com/photo-1580587771525-78b9dba3b914?w=800&q=80",
            "https://images.unsplash.com/photo-1564013799919-ab600027ffc6?w=800&q=80",
        ],
        "owner": None,
        "tags": ["family", "garden", "suburban", "schools"],
        "amenities": ["mature-garden", "outdoor-entertainment", "modern-kitchen"],
        "zoning": "residential",
        "water_rights": False,
        "electricity": True,
        "road_access": "paved",
    },
    {
        "key": "prop_005",
        "agent_email": SARAH,
        "title": "Agricultural Farm with Irrigation Systems",
        "description": (
            "Well-established 25-hectare agricultural farm with comprehensive irrigation systems and "
            "equipment. This productive farm includes fertile soil, reliable water sources, and various "
            "outbuildings. Currently used for vegetable production with excellent returns. Includes "
            "tractors and farming equipment."
        ),
        "address": "Farm 567, Irrigation Way",
        "city": "Hoedspruit",
        "province": "Mpumalanga",
        "postal_code": "1380",
        "latitude": -24.3547,
        "longitude": 30.9514,
        "price": Decimal("3200000"),
        "land_size": "25 hectares",
        "building_size": "600 sqm",
        "total_size": "25 hectares",
        "features": _features(5, 3, 3, 6, True, True, True, True, True, False, True),
        "property_type": "farm",
        "status": "active",
        "featured": False,
        "images": [
            "https://images.unsplash.com/photo-1500382017468-9049fed747ef?w=800&q=80",
            "https://images.unsplash.com/photo-1571063109413-5d5d5b8b2b5b?w=800&q=80",
            "https://images.unsplash.com/photo-1592899677977-9c10ca588bbd?w=800&q=80",
        ],
        "owner": None,
        "tags": ["agriculture", "irrigation", "equipment", "productive"],
        "amenities": ["irrigation-system", "farming-equipment", "outbuildings", "borehole"],
        "zoning": "agricultural",
        "water_rights": True,
        "electricity": True,
        "road_access": "paved",
    },
]


def _preferences(sms, price_changes, similar):
    return {
        "notifications": {"email": True, "sms": sms, "push": True},
        "property_alerts": {"new_properties": True, "price_changes": price_changes, "similar_properties": similar},
    }


USERS = [
    {
        "email": "admin@ruralproperties.co.za",
        "display_name": "Admin User",
        "first_name": "Admin",
        "last_name": "User",
        "phone": "+27 83 111 1111",
        "role": "admin",
        "profile_image": JOHN_IMAGE,
        "preferences": _preferences(True, True, True),
        "is_email_verified": True,
        "is_phone_verified": True,
    },
    {
        "email": JOHN,
        "display_name": "John Smith",
        "first_name": "John",
        "last_name": "Smith",
        "phone": "+27 83 123 4567",
        "role": "agent",
        "profile_image": JOHN_IMAGE,
        "preferences": _preferences(False, False, True),
        "is_email_verified": True,
        "is_phone_verified": True,
    },
    {
        "email": SARAH,
        "display_name": "Sarah Johnson",
        "first_name": "Sarah",
        "last_name": "Johnson",
        "phone": "+27 83 234 5678",
        "role": "agent",
        "profile_image": SARAH_IMAGE,
        "preferences": _preferences(True, True, True),
        "is_email_verified": True,
        "is_phone_verified": True,
    },
    {
        "email": REGULAR_USER,
        "display_name": "Regular User",
        "first_name": "Regular",
        "last_name": "User",
        "phone": "+27 83 999 9999",
        "role": "user",
        "profile_image": MIKE_IMAGE,
        "preferences": _preferences(False, True, False),
        "is_email_verified": True,
        "is_phone_verified": False,
    },
]

AGENTS = [
    {
        "email": JOHN,
        "display_name": "John Smith",
        "first_name": "John",
        "last_name": "Smith",
        "phone": "+27 83 123 4567",
        "profile_image": JOHN_IMAGE,
        "license_number": "EA123456",
        "specializations": ["farms", "smallholdings", "agricultural"],
        "areas": ["Limpopo", "Mpumalanga"],
        "languages": ["English", "Afrikaans", "Sepedi"],
        "experience": 8,
        "rating": 4.8,
        "total_reviews": 45,
        "bio": (
            "Experienced rural property specialist with 8 years in agricultural real estate. "
            "Passionate about helping clients find their perfect rural property."
        ),
        "social_media": {
            "linkedin": "https://linkedin.com/in/johnsmith",
            "facebook": "https://facebook.com/johnsmithrealtor",
        },
    },
    {
        "email": SARAH,
        "display_name": "Sarah Johnson",
        "first_name": "Sarah",
        "last_name": "Johnson",
        "phone": "+27 83 234 5678",
        "profile_image": SARAH_IMAGE,
        "license_number": "EA789012",
        "specializations": ["smallholdings", "residential", "luxury"],
        "areas": ["Mpumalanga", "Gauteng"],
        "languages": ["English", "Afrikaans", "Zulu"],
        "experience": 6,
        "rating": 4.9,
        "total_reviews": 32,
        "bio": (
            "Specializing in smallholdings and luxury rural properties. "
            "Dedicated to providing exceptional service to my clients."
        ),
        "social_media": {
            "linkedin": "https://linkedin.com/in/sarahjohnson",
            "facebook": "https://facebook.com/sarahjohnsonrealtor",
        },
    },
    {
        "email": MIKE,
        "display_name": "Mike Wilson",
        "first_name": "Mike",
        "last_name": "Wilson",
        "phone": "+27 83 345 6789",
        "profile_image": MIKE_IMAGE,
        "license_number": "EA345678",
        "specializations": ["plots", "development", "investment"],
        "areas": ["Limpopo", "North West"],
        "languages": ["English", "Afrikaans", "Tswana"],
        "experience": 5,
        "rating": 4.6,
        "total_reviews": 28,
        "bio": (
            "Expert in residential plots and development opportunities. "
            "Helping investors find profitable opportunities."
        ),
        "social_media": {
            "linkedin": "https://linkedin.com/in/mikewilson",
            "facebook": "https://facebook.com/mikewilsonrealtor",
        },
    },
]

_REGULAR_CONTACT = {"name": "Regular User", "email": REGULAR_USER, "phone": "+27 83 999 9999"}

INQUIRIES = [
    {
        "property_key": "prop_001",
        "user_email": REGULAR_USER,
        "agent_email": JOHN,
        "type": "viewing",
        "message": (
            "I'm interested in viewing this beautiful farm. When would be a good time to visit? "
            "I'm available this weekend."
        ),
        "contact_info": _REGULAR_CONTACT,
        "preferred_contact": "email",
        "status": "pending",
        "priority": "normal",
    },
    {
        "property_key": "prop_002",
        "user_email": REGULAR_USER,
        "agent_email": SARAH,
        "type": "general",
        "message": "Could you provide more information about the solar power system on this smallholding?",
        "contact_info": _REGULAR_CONTACT,
        "preferred_contact": "email",
        "status": "responded",
        "priority": "low",
    },
]

REVIEWS = [
    {
        "property_key": "prop_001",
        "user_email": REGULAR_USER,
        "agent_email": JOHN,
        "rating": 5,
        "title": "Excellent Service and Professionalism",
        "comment": (
            "John was absolutely fantastic throughout the entire process. His knowledge of rural "
            "properties and agricultural land is unmatched. He helped us find the perfect farm and "
            "guided us through every step. Highly recommend!"
        ),
        "pros": ["Professional", "Knowledgeable", "Responsive", "Good negotiator"],
        "cons": ["None"],
        "would_recommend": True,
        "verified_purchase": True,
        "status": "approved",
    },
    {
        "property_key": "prop_002",
        "user_email": REGULAR_USER,
        "agent_email": SARAH,
        "rating": 4,
        "title": "Great Experience Overall",
        "comment": (
            "Sarah was very helpful and patient. She understood exactly what we were looking for and "
            "found several suitable options. The process was smooth and she answered all our "
            "questions promptly."
        ),
        "pros": ["Patient", "Good listener", "Responsive"],
        "cons": ["Could have provided more area information"],
        "would_recommend": True,
        "verified_purchase": True,
        "status": "approved",
    },
]

SAVED_SEARCHES = [
    {
        "user_email": REGULAR_USER,
        "name": "Farms in Limpopo under R3M",
        "filters": {
            "type": "Farm",
            "province": "Limpopo",
            "price": "Any Price",
            "min_price": 500000,
            "max_price": 3000000,
        },
        "frequency": "daily",
        "is_active": True,
    },
    {
        "user_email": REGULAR_USER,
        "name": "Smallholdings in Mpumalanga",
        "filters": {
            "type": "Smallholding",
            "province": "Mpumalanga",
            "price": "Any Price",
            "min_price": 1000000,
            "max_price": 2500000,
        },
        "frequency": "weekly",
        "is_active": True,
    },
]

SYSTEM_SETTINGS = {
    "site": {
        "name": "Rural Properties",
        "description": "Your trusted partner for rural real estate in South Africa",
        "contact_email": "info@ruralproperties.co.za",
        "contact_phone": "+27 15 123 4567",
        "address": "123 Main St, Tzaneen, 0850",
        "social_media": {
            "facebook": "https://facebook.com/ruralproperties",
            "twitter": "https://twitter.com/ruralproperties",
            "instagram": "https://instagram.com/ruralproperties",
            "linkedin": "https://linkedin.com/company/ruralproperties",
        },
    },
    "features": {
        "property_alerts": True,
        "saved_searches": True,
        "virtual_tours": True,
        "mortgage_calculator": True,
        "property_valuation": True,
        "document_signing": False,
    },
    "pricing": {
        "featured_listing_fee": 500,
        "premium_listing_fee": 1000,
        "agent_commission": 7.5,
    },
    "maintenance": {
        "mode": False,
        "message": "We're currently undergoing scheduled maintenance.",
    },
}
