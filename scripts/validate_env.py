import os
import sys
from pathlib import Path
from dotenv import load_dotenv

load_dotenv(Path(__file__).parent.parent / '.env')

import argparse

parser = argparse.ArgumentParser()
parser.add_argument('--strict', '-s', action='store_true', help='Convert warnings to failures')
args = parser.parse_args()
STRICT = args.strict

errors = []
warnings = []

required = {
    'openai': ['OPENAI_API_KEY'],
}

for cat, keys in required.items():
    for k in keys:
        if not os.getenv(k):
            errors.append(f"{cat}: Missing {k}")

openai_key = os.getenv('OPENAI_API_KEY', '')
if openai_key and not openai_key.startswith('sk-') and not os.getenv('OPENAI_BASE_URL'):
    warnings.append('OPENAI_API_KEY does not start with sk-; verify provider')

for name in ('OPENAI_TIMEOUT', 'FLASHCARD_TEMPERATURE', 'SUMMARIZER_TEMPERATURE', 'MINDMAP_TEMPERATURE'):
    val = os.getenv(name)
    if val is None:
        continue
    try:
        if float(val) < 0:
            errors.append(f'{name} must not be negative')
    except ValueError:
        errors.append(f'{name} must be a number')

for name in ('FLASHCARD_MAX_TOKENS', 'MAX_IMAGE_SIZE_MB', 'MAX_PDF_SIZE_MB', 'OPENAI_RETRY_ATTEMPTS'):
    val = os.getenv(name)
    if val is None:
        continue
    if not val.isdigit() or int(val) < 1:
        errors.append(f'{name} must be a positive integer')

if os.getenv('LOG_FORMAT', 'json') not in ('json', 'text'):
    errors.append("LOG_FORMAT must be 'json' or 'text'")

redis_enabled = os.getenv('REDIS_CACHE_ENABLED', 'false').lower() in ('1', 'true', 'yes')
if redis_enabled and not os.getenv('REDIS_HOST'):
    warnings.append('REDIS_CACHE_ENABLED is set but REDIS_HOST is not; defaulting to localhost')

for w in warnings:
    print(f'WARNING: {w}')
for e in errors:
    print(f'ERROR: {e}')

if errors or (STRICT and warnings):
    sys.exit(1)
print('Environment OK')
