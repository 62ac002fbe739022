import os
import sys
import logging

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from database import SessionLocal, init_db
from models.product import Product

logger = logging.getLogger(__name__)

IMAGE_BASE = os.getenv("SEED_IMAGE_BASE", "https://images.trigopan.example/products")

# Default bakery menu: (category, name, price COP, description, image)
MENU = [
    ("pan", "Pan Francés", 1000, "Pan crujiente recién horneado", "bread.jpg"),
    ("pan", "Pan Integral", 2000, "Saludable y nutritivo", "bread.jpg"),
    ("pan", "Pan de Yuca", 1500, "Tradicional colombiano", "bread.jpg"),
    ("pan", "Pan Mogolla", 1200, "Suave y esponjoso", "bread.jpg"),
    ("pasteles", "Torta de Chocolate", 35000, "Deliciosa y húmeda", "cake.jpg"),
    ("pasteles", "Torta de Vainilla", 30000, "Clásica y elegante", "cake.jpg"),
    ("pasteles", "Torta de Zanahoria", 32000, "Con crema de queso", "cake.jpg"),
    ("pasteles", "Torta Tres Leches", 38000, "Suave y cremosa", "cake.jpg"),
    ("pasteleria", "Pandebono", 1500, "Tradicional y delicioso", "pastries.jpg"),
    ("pasteleria", "Buñuelos", 1200, "Crujientes por fuera", "pastries.jpg"),
    ("pasteleria", "Almojábanas", 1300, "Suaves y esponjosas", "pastries.jpg"),
    ("pasteleria", "Roscón", 2500, "Dulce y aromático", "pastries.jpg"),
    ("bebidas", "Café Americano", 2500, "Café de alta calidad", "beverages.jpg"),
    ("bebidas", "Café con Leche", 3000, "Cremoso y suave", "beverages.jpg"),
    ("bebidas", "Chocolate Caliente", 3500, "Rico y espeso", "beverages.jpg"),
    ("bebidas", "Jugo Natural", 4000, "Fresco y natural", "beverages.jpg"),
]

def seed_products(session) -> int:
    """Insert menu items that are not in the catalog yet. Returns how many were added."""
    existing = {name for (name,) in session.query(Product.name).all()}
    added = 0
    for category, name, price, description, image in MENU:
        if name in existing:
            continue
        session.add(Product(
            name=name,
            price=price,
            description=description,
            category=category,
            image_url=f"{IMAGE_BASE}/{image}",
            is_active=True,
        ))
        added += 1
    session.commit()
    return added

def main():
    logging.basicConfig(level=logging.INFO)
    init_db()
    session = SessionLocal()
    try:
        added = seed_products(session)
        logger.info(f"Seeded {added} product(s)")
    finally:
        session.close()

if __name__ == "__main__":
    main()
