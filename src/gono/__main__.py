from gono.main import main

main()
