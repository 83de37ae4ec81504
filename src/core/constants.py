"""Core constants used across plantel modules.

This module centralizes column names, labels, and thresholds.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

DEFAULT_DATA_ROOT = Path(".plantel")
UNITS_DIR_NAME = "units"
VERSIONS_DIR_NAME = "versions"
CATALOG_FILE_NAME = "catalog.json"
SNAPSHOT_FILE_NAME = "snapshot.json"
QUALITY_FILE_NAME = "quality.json"

DEFAULT_COMMIT_MAX_RETRIES = 5
DEFAULT_MAX_WORKERS = 4

UNSPECIFIED_LABEL = "No especificado"
UNSPECIFIED_UNIT_LABEL = "No especificada"

COLUMN_UNIT = "SECRETARIA"
COLUMN_CONTRACT_TYPE = "TIPO_CONTRATACION"
COLUMN_FUNCTION = "FUNCION"
COLUMN_SALARY_SCALE = "ESCALAFON"
COLUMN_BIRTH_DATE = "FECHA_NACIMIENTO"
COLUMN_HIRE_DATE = "FECHA_INGRESO"
COLUMN_GENDER = "GENERO"
COLUMN_BASE_SALARY = "SUELDO_BASICO"
COLUMN_DEPARTMENT = "DEPARTAMENTO"
COLUMN_SUBDEPARTMENT = "SUBDEPARTAMENTO"
COLUMN_POSITION = "CARGO"
DEFAULT_UNIT_COLUMN = COLUMN_UNIT
ROSTER_COLUMNS = (
    COLUMN_UNIT,
    COLUMN_CONTRACT_TYPE,
    COLUMN_FUNCTION,
    COLUMN_SALARY_SCALE,
    COLUMN_BIRTH_DATE,
    COLUMN_HIRE_DATE,
    COLUMN_GENDER,
    COLUMN_BASE_SALARY,
    COLUMN_DEPARTMENT,
    COLUMN_SUBDEPARTMENT,
    COLUMN_POSITION,
)
SUPPORTED_ROSTER_EXTENSIONS = (".xlsx", ".xlsm", ".csv")
ROSTER_DATE_FORMATS = ("%Y-%m-%d", "%Y-%m-%d %H:%M:%S", "%d/%m/%Y", "%d-%m-%Y", "%Y/%m/%d")
SPREADSHEET_EPOCH = date(1899, 12, 30)
SPREADSHEET_MAX_SERIAL = 2958465

DIMENSION_CONTRACT_TYPE = "contratacion"
DIMENSION_FUNCTION = "funcion"
DIMENSION_SALARY_SCALE = "escalafon"
DIMENSION_AGE_RANGE = "edad"
DIMENSION_TENURE_RANGE = "antiguedad"
DIMENSION_GENDER = "genero"
DIMENSION_DEPARTMENT = "departamento"
DIMENSION_SUBDEPARTMENT = "subdepartamento"
DIMENSION_POSITION = "cargo"
SUPPORTED_DIMENSIONS = (
    DIMENSION_CONTRACT_TYPE,
    DIMENSION_FUNCTION,
    DIMENSION_SALARY_SCALE,
    DIMENSION_AGE_RANGE,
    DIMENSION_TENURE_RANGE,
    DIMENSION_GENDER,
    DIMENSION_DEPARTMENT,
    DIMENSION_SUBDEPARTMENT,
    DIMENSION_POSITION,
)

# Upper bounds are exclusive; the last label has no upper bound.
AGE_RANGES = (
    (25, "18-25"),
    (35, "26-35"),
    (45, "36-45"),
    (55, "46-55"),
    (65, "56-65"),
)
AGE_OPEN_RANGE_LABEL = "65+"
TENURE_RANGES = (
    (5, "0-5 años"),
    (10, "6-10 años"),
    (15, "11-15 años"),
    (20, "16-20 años"),
    (25, "21-25 años"),
)
TENURE_OPEN_RANGE_LABEL = "25+ años"
DAYS_PER_YEAR = 365.25

PERCENTAGE_PRECISION = 2

QUALITY_BASE_SCORE = 100
QUALITY_MISSING_HEADCOUNT_PENALTY = 20
QUALITY_ZERO_MASS_PENALTY = 15
QUALITY_HEADCOUNT_WITHOUT_MASS_PENALTY = 25
QUALITY_AVERAGE_MISMATCH_PENALTY = 10
QUALITY_AVERAGE_TOLERANCE = 0.01

SMALL_UNIT_MAX_HEADCOUNT = 100
MEDIUM_UNIT_MAX_HEADCOUNT = 500
