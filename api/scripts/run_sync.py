"""
CLI: Lake -> FreshService (one-way sync de custom fields de requesters).

Uso recomendado:
  - Corridas manuales o desde un cron externo cuando la API no esta levantada.
  - Misma logica que el trigger HTTP y el scheduler (RequesterSyncUseCases).

Variables de entorno requeridas:
  - SQL_CONNECTION_STRING (URL SQLAlchemy o connection string ODBC)
  - FRESHSERVICE_BASE_URL
  - FRESHSERVICE_API_KEY

Ejecución:
  python scripts/run_sync.py
  python scripts/run_sync.py --json
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

# Permite ejecutar este script desde cualquier cwd sin instalar el paquete.
# La carpeta "api" contiene el paquete raíz `lakesync/`.
_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

# Cargar variables desde .env si existe:
# - api/.env
# - repo_root/.env
load_dotenv(_API_ROOT / ".env", override=False)
load_dotenv(_API_ROOT.parent / ".env", override=False)

from lakesync.application.dto.sync_dto import SyncErrorDTO, SyncResponseDTO
from lakesync.application.use_cases.sync_use_cases import RequesterSyncUseCases


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Sync Lake -> FreshService requesters")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Imprime el resultado con el mismo formato JSON del trigger HTTP.",
    )
    args = parser.parse_args(argv)

    logger.info("Iniciando sync Lake -> FreshService desde CLI...")
    try:
        result = RequesterSyncUseCases().execute_sync()
    except Exception as e:
        logger.error(f"Sync fallo: {e}")
        if args.json:
            print(SyncErrorDTO(error=str(e)).model_dump_json(indent=2))
        return 1

    if args.json:
        print(SyncResponseDTO.from_result(result).model_dump_json(indent=2, by_alias=True))
    else:
        print(result.summary)
        for error in result.errors:
            print(f"  - {error}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
