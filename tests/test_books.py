from models import Book, BookInstance
from helpers import location_id


def book_form(author_id, **overrides):
    data = {"title": "Emma", "author": author_id, "summary": "A matchmaker.", "isbn": "9780141439587"}
    data.update(overrides)
    return data


def test_root_redirects_to_catalog_home(client):
    resp = client.get("/")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/catalog/")


def test_catalog_home_is_book_list(client, make_book):
    make_book("Emma")
    assert client.get("/catalog/").get_data(as_text=True) == client.get("/catalog/books").get_data(as_text=True)


def test_list_in_insertion_order(client, make_book):
    make_book("Persuasion")
    make_book("Emma")
    page = client.get("/catalog/books").get_data(as_text=True)
    assert page.index("Persuasion") < page.index("Emma")


def test_create_get_offers_authors_and_genres(client, make_author, make_genre):
    author = make_author()
    genre = make_genre("Romance")
    page = client.get("/catalog/book/create").get_data(as_text=True)
    assert f'value="{author.id}"' in page
    assert f'value="{genre.id}"' in page


def test_create_with_genres(client, storage, make_author, make_genre):
    author = make_author()
    romance, satire = make_genre("Romance"), make_genre("Satire")
    resp = client.post("/catalog/book/create", data=book_form(author.id, genre=[romance.id, satire.id]))
    assert resp.status_code == 302

    book = storage.get(Book, location_id(resp))
    assert (book.title, book.author_id, book.summary, book.isbn) == ("Emma", author.id, "A matchmaker.", "9780141439587")
    assert sorted(book.genre_ids) == sorted([romance.id, satire.id])

    page = client.get(book.url).get_data(as_text=True)
    assert "Austen, Jane" in page
    assert "Romance" in page and "Satire" in page


def test_create_invalid_keeps_selection(client, storage, make_author, make_genre):
    author = make_author()
    genre = make_genre("Romance")
    resp = client.post("/catalog/book/create", data=book_form(author.id, title="  ", genre=[genre.id]))
    assert resp.status_code == 200
    page = resp.get_data(as_text=True)
    assert "Title must not be empty." in page
    assert "checked" in page
    assert "selected" in page
    assert storage.count(Book) == 0


def test_create_with_unknown_author_is_rejected_by_store(client, storage):
    resp = client.post("/catalog/book/create", data=book_form("no-such-author"))
    assert resp.status_code == 409
    assert storage.count(Book) == 0


def test_detail_missing_is_404(client):
    assert client.get("/catalog/book/nope").status_code == 404


def test_delete_get_lists_copies(client, make_instance):
    instance = make_instance(imprint="Penguin Classics")
    page = client.get(f"/catalog/book/{instance.book_id}/delete").get_data(as_text=True)
    assert "Penguin Classics" in page
    assert 'name="bookid"' in page


def test_delete_removes_book_and_copies(client, storage, make_instance, make_book):
    instance = make_instance()
    other = make_book("Persuasion")
    resp = client.post(f"/catalog/book/{instance.book_id}/delete", data={"bookid": instance.book_id})
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/catalog/books")
    assert [b.id for b in storage.find(Book)] == [other.id]
    assert storage.count(BookInstance) == 0


def test_delete_get_missing_redirects(client):
    resp = client.get("/catalog/book/nope/delete")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/catalog/books")


def test_update_replaces_fields_and_genres(client, storage, make_book, make_genre, make_author):
    romance, satire = make_genre("Romance"), make_genre("Satire")
    book = make_book(genres=[romance])
    new_author = make_author("Charles", "Dickens")

    resp = client.post(
        f"/catalog/book/{book.id}/update",
        data=book_form(new_author.id, title="Bleak House", genre=[satire.id]),
    )
    assert resp.status_code == 302
    assert location_id(resp) == book.id

    updated = storage.get(Book, book.id)
    assert updated.title == "Bleak House"
    assert updated.author_id == new_author.id
    assert updated.genre_ids == [satire.id]
    assert storage.count(Book) == 1


def test_update_get_prefills(client, make_book, make_genre):
    genre = make_genre("Romance")
    book = make_book(genres=[genre])
    page = client.get(f"/catalog/book/{book.id}/update").get_data(as_text=True)
    assert 'value="Emma"' in page
    assert "checked" in page


def test_update_invalid_rerenders(client, storage, make_book):
    book = make_book()
    resp = client.post(f"/catalog/book/{book.id}/update", data=book_form(book.author_id, isbn=""))
    assert resp.status_code == 200
    assert "ISBN must not be empty." in resp.get_data(as_text=True)
    assert storage.get(Book, book.id).isbn == "9780141439587"
