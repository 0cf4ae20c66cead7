"""Configured delivery providers."""

from __future__ import annotations

from ...errors import InvalidInputError
from ...models.domain import DeliveryProvider, DriverDetails, VehicleDetails

DELIVERY_PROVIDERS: tuple[DeliveryProvider, ...] = (
    DeliveryProvider(
        id="bdp-001",
        name="Banda Express Boda",
        vehicle_type="boda",
        description="Fast motorcycle delivery for small agricultural products",
        base_cost=120,
        cost_per_km=15,
        rating=4.9,
        max_weight=25,
        max_distance=15,
        service_areas=("Nairobi", "Kiambu", "Machakos"),
        driver=DriverDetails(name="John Mwangi", phone="+254712345001", rating=4.9, years_experience=5),
        vehicle=VehicleDetails(license_plate="KCA 123B", model="Honda CB 150", year=2022),
        banda_recommended=True,
        completed_deliveries=2850,
        specialties=("Small packages", "Express delivery", "Seeds", "Fertilizers"),
    ),
    DeliveryProvider(
        id="bdp-002",
        name="Banda Probox Fleet",
        vehicle_type="van",
        description="Reliable van service for medium agricultural loads",
        base_cost=250,
        cost_per_km=25,
        rating=4.7,
        max_weight=800,
        max_distance=50,
        service_areas=("Nairobi", "Kiambu", "Nakuru", "Thika"),
        driver=DriverDetails(name="Mary Wanjiku", phone="+254712345002", rating=4.7, years_experience=8),
        vehicle=VehicleDetails(license_plate="KBZ 456P", model="Toyota Probox", year=2021),
        banda_recommended=True,
        completed_deliveries=1890,
        specialties=("Fragile produce", "Medium loads", "Dairy products", "Fresh vegetables"),
    ),
    DeliveryProvider(
        id="bdp-003",
        name="Banda Hiace Cargo",
        vehicle_type="van",
        description="Large van for bulk agricultural deliveries",
        base_cost=400,
        cost_per_km=35,
        rating=4.8,
        max_weight=1500,
        max_distance=100,
        service_areas=("Nairobi", "Kiambu", "Nakuru", "Eldoret", "Mombasa"),
        driver=DriverDetails(name="Peter Kamau", phone="+254712345003", rating=4.8, years_experience=12),
        vehicle=VehicleDetails(license_plate="KCD 789H", model="Toyota Hiace", year=2020),
        completed_deliveries=1250,
        specialties=("Bulk orders", "Long distance", "Grain transport", "Farm equipment"),
    ),
    DeliveryProvider(
        id="bdp-004",
        name="Banda Heavy Logistics",
        vehicle_type="truck",
        description="Heavy-duty truck for large agricultural orders",
        base_cost=600,
        cost_per_km=45,
        rating=4.6,
        max_weight=5000,
        max_distance=200,
        service_areas=("Nairobi", "Nakuru", "Eldoret", "Kisumu", "Mombasa", "Nyeri"),
        driver=DriverDetails(name="Samuel Kiprop", phone="+254712345004", rating=4.6, years_experience=15),
        vehicle=VehicleDetails(license_plate="KBF 012T", model="Isuzu FRR", year=2019),
        completed_deliveries=820,
        specialties=("Heavy loads", "Farm machinery", "Bulk grain", "Construction materials"),
    ),
    DeliveryProvider(
        id="bdp-005",
        name="Banda ColdChain Express",
        vehicle_type="truck",
        description="Specialized refrigerated transport for perishables",
        base_cost=800,
        cost_per_km=55,
        rating=4.9,
        max_weight=3000,
        max_distance=150,
        service_areas=("Nairobi", "Kiambu", "Nakuru", "Eldoret", "Meru"),
        driver=DriverDetails(name="Grace Nyambura", phone="+254712345005", rating=4.9, years_experience=10),
        vehicle=VehicleDetails(license_plate="KCF 345C", model="Scania R450", year=2023),
        banda_recommended=True,
        completed_deliveries=450,
        specialties=("Cold storage", "Dairy products", "Fresh produce", "Meat transport"),
    ),
    DeliveryProvider(
        id="bdp-006",
        name="Banda Pickup Service",
        vehicle_type="pickup",
        description="Versatile pickup truck for mixed agricultural goods",
        base_cost=300,
        cost_per_km=30,
        rating=4.5,
        max_weight=1200,
        max_distance=80,
        service_areas=("Nairobi", "Kiambu", "Machakos", "Kajiado"),
        driver=DriverDetails(name="David Ochieng", phone="+254712345006", rating=4.5, years_experience=7),
        vehicle=VehicleDetails(license_plate="KBG 678P", model="Toyota Hilux", year=2021),
        completed_deliveries=950,
        specialties=("Mixed loads", "Farm tools", "Animal feed", "Building materials"),
    ),
)


def get_provider(provider_id: str) -> DeliveryProvider:
    for provider in DELIVERY_PROVIDERS:
        if provider.id == provider_id:
            return provider
    raise InvalidInputError(f"Unknown delivery provider '{provider_id}'.")
