"""Recording test doubles for the injector, release creator, zipper, file info and extractor."""