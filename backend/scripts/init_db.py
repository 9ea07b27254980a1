import sys
import os
import logging

# Add parent directory of 'scripts' (i.e., 'backend') to path to allow importing 'donorlink'
backend_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(backend_dir)

from donorlink.database import engine, Base, SessionLocal
from donorlink.models.user import User
from donorlink.models.blood_bank import BloodBank
from donorlink.security import hash_password

logger = logging.getLogger("init_db")

DEMO_PASSWORD = "donorlink"

DEMO_PROFILES = [
    {"email": "admin@donorlink.example.org", "full_name": "Platform Admin", "role": "admin"},
    {"email": "aiims@donorlink.example.org", "full_name": "AIIMS Blood Centre", "role": "hospital",
     "latitude": 28.5672, "longitude": 77.2100, "location_address": "Ansari Nagar, New Delhi"},
    {"email": "agent@donorlink.example.org", "full_name": "Referral Agent", "role": "agent"},
    {"email": "asha@donorlink.example.org", "full_name": "Asha Verma", "role": "donor", "blood_group": "O+",
     "latitude": 28.6139, "longitude": 77.2090, "location_address": "Connaught Place, New Delhi"},
    {"email": "ravi@donorlink.example.org", "full_name": "Ravi Kumar", "role": "donor", "blood_group": "B+",
     "latitude": 28.4595, "longitude": 77.0266, "location_address": "Gurugram", "is_available": False},
]

DEMO_BANKS = [
    {"name": "Red Cross Blood Bank", "address": "1 Red Cross Road, New Delhi",
     "latitude": 28.6280, "longitude": 77.2160, "contact_number": "011-23716441",
     "operating_hours": "24x7", "available_blood_types": ["A+", "B+", "O+", "O-"]},
    {"name": "Rotary Blood Bank", "address": "Tughlakabad Institutional Area, New Delhi",
     "latitude": 28.5110, "longitude": 77.2620, "contact_number": "011-29054066",
     "operating_hours": "08:00-20:00", "available_blood_types": ["AB+", "AB-", "O+"]},
]


def init_db():
    logger.info("Creating tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created successfully!")


def load_demo_data():
    db = SessionLocal()
    try:
        if db.query(User).count():
            logger.info("Profiles already present, skipping demo data")
            return
        for fields in DEMO_PROFILES:
            db.add(User(hashed_password=hash_password(DEMO_PASSWORD), **fields))
        for fields in DEMO_BANKS:
            db.add(BloodBank(**fields))
        db.commit()
        logger.info("Loaded %d profiles and %d blood banks", len(DEMO_PROFILES), len(DEMO_BANKS))
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
    if "--demo" in sys.argv:
        load_demo_data()
