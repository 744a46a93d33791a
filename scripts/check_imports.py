import sys, importlib
print('PYTHON:', sys.executable)
mods = ['pandas','openpyxl','fitz','PIL','pytesseract','flask','flask_cors','google.cloud.vision']
for m in mods:
    try:
        importlib.import_module(m)
        print(m + ' OK')
    except ImportError as e:
        print(m + ' ERR', type(e).__name__, str(e))
