from catalog_verifier.main import run

run()
