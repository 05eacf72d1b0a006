import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def test_client_package_does_not_load_the_orm():
    code = (
        "import sys, blogcms.client; "
        "loaded = [m for m in ('blogcms.database', 'blogcms.models', 'sqlalchemy') if m in sys.modules]; "
        "print(','.join(loaded))"
    )
    out = subprocess.run([sys.executable, "-c", code], cwd=ROOT, capture_output=True, text=True, check=True)
    assert out.stdout.strip() == ""
