from village.main import run

run()
