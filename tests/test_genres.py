import unicodedata

from models import Genre
from helpers import location_id


def create_genre(client, name):
    return client.post("/catalog/genre/create", data={"name": name})


def test_create_genre(client, storage):
    resp = create_genre(client, "  Fantasy ")
    assert resp.status_code == 302
    genre = storage.get(Genre, location_id(resp))
    assert genre.name == "Fantasy"
    assert "Genre: Fantasy" in client.get(genre.url).get_data(as_text=True)


def test_duplicate_name_returns_existing_genre(client, storage):
    first = create_genre(client, "fiction")
    second = create_genre(client, "Fiction")
    assert location_id(second) == location_id(first)
    assert storage.count(Genre) == 1


def test_duplicate_check_folds_non_ascii_case(client, storage):
    first = create_genre(client, "Épopée")
    second = create_genre(client, "ÉPOPÉE")
    assert location_id(second) == location_id(first)
    assert storage.count(Genre) == 1


def test_duplicate_check_matches_canonically_equivalent_forms(client, storage):
    # Precomposed vs combining accents, differing in case as well
    first = create_genre(client, unicodedata.normalize("NFC", "Épopée"))
    second = create_genre(client, unicodedata.normalize("NFD", "ÉPOPÉE"))
    assert location_id(second) == location_id(first)
    assert storage.count(Genre) == 1


def test_update_refuses_canonically_equivalent_name(client, storage, make_genre):
    make_genre(unicodedata.normalize("NFC", "Épopée"))
    other = make_genre("Fiction")
    resp = client.post(f"/catalog/genre/{other.id}/update", data={"name": unicodedata.normalize("NFD", "épopée")})
    assert resp.status_code == 200
    assert "A genre with this name already exists." in resp.get_data(as_text=True)
    assert storage.get(Genre, other.id).name == "Fiction"


def test_short_name_rerenders(client, storage):
    resp = create_genre(client, "ab")
    assert resp.status_code == 200
    assert "Genre name must contain at least 3 characters." in resp.get_data(as_text=True)
    assert storage.count(Genre) == 0


def test_list_sorted_by_name(client, make_genre):
    for name in ("Romance", "Fantasy", "Poetry"):
        make_genre(name)
    page = client.get("/catalog/genres").get_data(as_text=True)
    assert page.index("Fantasy") < page.index("Poetry") < page.index("Romance")


def test_detail_lists_books_in_genre(client, make_book, make_genre):
    fantasy = make_genre("Fantasy")
    make_book("The Hobbit", genres=[fantasy])
    make_book("Emma")
    page = client.get(f"/catalog/genre/{fantasy.id}").get_data(as_text=True)
    assert "The Hobbit" in page
    assert "Emma" not in page


def test_detail_missing_is_404(client):
    assert client.get("/catalog/genre/nope").status_code == 404


def test_delete_blocked_while_books_use_genre(client, storage, make_book, make_genre):
    fantasy = make_genre("Fantasy")
    hobbit = make_book("The Hobbit", genres=[fantasy])
    resp = client.post(f"/catalog/genre/{fantasy.id}/delete", data={"genreid": fantasy.id})
    assert resp.status_code == 200
    assert hobbit.url in resp.get_data(as_text=True)
    assert storage.count(Genre) == 1


def test_delete_unused_genre(client, storage, make_genre):
    poetry, kept = make_genre("Poetry"), make_genre("Fantasy")
    resp = client.post(f"/catalog/genre/{poetry.id}/delete", data={"genreid": poetry.id})
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/catalog/genres")
    assert [g.id for g in storage.find(Genre)] == [kept.id]


def test_delete_get_missing_redirects(client):
    resp = client.get("/catalog/genre/nope/delete")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/catalog/genres")


def test_update_renames_in_place(client, storage, make_genre):
    genre = make_genre("Scifi")
    resp = client.post(f"/catalog/genre/{genre.id}/update", data={"name": "Science Fiction"})
    assert resp.status_code == 302
    assert location_id(resp) == genre.id
    assert storage.get(Genre, genre.id).name == "Science Fiction"


def test_update_may_change_case_of_own_name(client, storage, make_genre):
    genre = make_genre("poetry")
    resp = client.post(f"/catalog/genre/{genre.id}/update", data={"name": "Poetry"})
    assert resp.status_code == 302
    assert storage.get(Genre, genre.id).name == "Poetry"


def test_update_refuses_another_genres_name(client, storage, make_genre):
    make_genre("Fantasy")
    genre = make_genre("Poetry")
    resp = client.post(f"/catalog/genre/{genre.id}/update", data={"name": "fantasy"})
    assert resp.status_code == 200
    assert "A genre with this name already exists." in resp.get_data(as_text=True)
    assert storage.get(Genre, genre.id).name == "Poetry"


def test_update_get_prefills_and_missing_404(client, make_genre):
    genre = make_genre("Poetry")
    assert 'value="Poetry"' in client.get(f"/catalog/genre/{genre.id}/update").get_data(as_text=True)
    assert client.get("/catalog/genre/nope/update").status_code == 404
