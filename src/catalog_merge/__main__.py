from catalog_merge.ui.cli import run

run()
