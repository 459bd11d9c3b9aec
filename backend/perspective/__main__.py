from perspective.main import run

run()
