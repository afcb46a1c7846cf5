from livraria.main import main

main()
