from myapp.migrations.cli import main

main()
