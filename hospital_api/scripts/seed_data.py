# hospital_api/scripts/seed_data.py
"""
Load doctors and patients from CSV files into MongoDB.

    python -m hospital_api.scripts.seed_data --doctors doctors.csv --patients patients.csv --reset

doctors.csv:  name, specialty, availability   (days separated by ';')
patients.csv: name, age, medicalHistory       (entries separated by ';')
"""

import argparse
import asyncio
from typing import List

import pandas as pd

from hospital_api.core.config import settings
from hospital_api.core.logger import logger
from hospital_api.db.mongo import DOCTORS, PATIENTS, create_client
from hospital_api.models.doctor import Doctor
from hospital_api.models.patient import Patient


def _split(value) -> List[str]:
    if pd.isna(value):
        return []
    return [part.strip() for part in str(value).split(";") if part.strip()]


def build_doctor_records(df: pd.DataFrame) -> List[dict]:
    records = []
    for _, row in df.iterrows():
        doctor = Doctor(
            name=row["name"],
            specialty=row["specialty"],
            availability=_split(row.get("availability")),
        )
        records.append(doctor.model_dump())
    return records


def build_patient_records(df: pd.DataFrame) -> List[dict]:
    records = []
    for _, row in df.iterrows():
        age = row.get("age")
        patient = Patient(
            name=row["name"],
            age=None if pd.isna(age) else int(age),
            medicalHistory=_split(row.get("medicalHistory")),
        )
        records.append(patient.model_dump(by_alias=True))
    return records


async def load(doctors_csv: str = None, patients_csv: str = None, reset: bool = False):
    client = create_client()
    db = client[settings.MONGODB_DB]

    try:
        for path, collection, build in (
            (doctors_csv, DOCTORS, build_doctor_records),
            (patients_csv, PATIENTS, build_patient_records),
        ):
            if not path:
                continue
            records = build(pd.read_csv(path))
            if reset:
                await db[collection].delete_many({})
            if records:
                await db[collection].insert_many(records)
            logger.info(f"Inserted {len(records)} records into '{collection}'")
    finally:
        client.close()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Seed doctors and patients from CSV files")
    parser.add_argument("--doctors", help="CSV file with doctors")
    parser.add_argument("--patients", help="CSV file with patients")
    parser.add_argument("--reset", action="store_true", help="Remove existing records first")
    args = parser.parse_args(argv)
    asyncio.run(load(args.doctors, args.patients, args.reset))


if __name__ == "__main__":
    main()
