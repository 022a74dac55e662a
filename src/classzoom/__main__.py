from classzoom.cli import main

main()
